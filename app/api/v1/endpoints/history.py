"""
History endpoints: completed sessions, stats and profile summary.
"""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from app.db.session import get_db
from app.schemas.history import (AggregateStats, CompletedSessionRecord, CompletionCreate, HistoryDayGroup,
                                 ProfileResponse, )
from app.services.history_service import HistoryService

router = APIRouter()


@router.get("/sessions", summary="List completed sessions.", response_model=list[CompletedSessionRecord], )
def list_sessions(sort_by: Literal["date", "duration"] = Query("date", description="Newest or longest first"),
                  db: Session = Depends(get_db), ):
    return HistoryService(db).list_sessions(sort_by)


@router.get("/sessions/grouped", summary="Completed sessions grouped by day.", response_model=list[HistoryDayGroup], )
def list_sessions_by_day(db: Session = Depends(get_db)):
    return HistoryService(db).grouped()


@router.post("/sessions", summary="Record a completed session.", response_model=CompletedSessionRecord,
             status_code=status.HTTP_201_CREATED, )
def record_session(data: CompletionCreate, db: Session = Depends(get_db)):
    record = HistoryService(db).record(data)
    if record is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Storage unavailable", )
    return record


@router.get("/stats", summary="Get the stored aggregate stats.", response_model=AggregateStats, )
def get_stats(db: Session = Depends(get_db)):
    return HistoryService(db).stats()


@router.get("/profile", summary="Meditation journey overview.", response_model=ProfileResponse, )
def get_profile(db: Session = Depends(get_db)):
    return HistoryService(db).profile()


@router.delete("", summary="Delete all history.", status_code=status.HTTP_204_NO_CONTENT, )
def clear_history(db: Session = Depends(get_db)):
    HistoryService(db).clear()
