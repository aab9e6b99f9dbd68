"""
Load or clear demo meditation history.

Writes ten demo sessions (three-day streak ending today) into the
configured database so the profile and history endpoints have data.

Usage:
    python scripts/demo_history.py          # load demo data
    python scripts/demo_history.py --clear  # remove all history
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlmodel import Session

from app.db.init_db import init_db
from app.db.session import engine
from app.praylude.demo import generate_demo_sessions
from app.praylude.formatting import format_total_time
from app.praylude.history import HistoryStore
from app.storage.sql import SQLKeyValueStore

if __name__ == "__main__":
    init_db()

    with Session(engine) as session:
        store = HistoryStore(SQLKeyValueStore(session))

        if "--clear" in sys.argv[1:]:
            if not store.clear():
                print("ERROR: could not clear history")
                sys.exit(1)
            print("Demo data cleared")
            sys.exit(0)

        if not store.replace_all(generate_demo_sessions()):
            print("ERROR: could not write demo history")
            sys.exit(1)

        stats = store.get_stats()
        print("Demo data loaded:")
        print(f"  sessions: {stats.total_sessions}")
        print(f"  total:    {format_total_time(stats.total_minutes)}")
        print(f"  streak:   {stats.current_streak} days")
