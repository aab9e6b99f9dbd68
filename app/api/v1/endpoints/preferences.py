"""
Preference endpoints: dark/light theme.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_store
from app.praylude.theme import get_theme, set_theme, toggle_theme
from app.schemas.preferences import ThemePreference
from app.storage.base import KeyValueStore

router = APIRouter()


@router.get("/theme", summary="Get the theme preference.", response_model=ThemePreference, )
def read_theme(store: KeyValueStore = Depends(get_store)):
    return ThemePreference(theme=get_theme(store))


@router.put("/theme", summary="Set the theme preference.", response_model=ThemePreference, )
def update_theme(data: ThemePreference, store: KeyValueStore = Depends(get_store)):
    set_theme(store, data.theme)
    return ThemePreference(theme=get_theme(store))


@router.post("/theme/toggle", summary="Switch between dark and light.", response_model=ThemePreference, )
def switch_theme(store: KeyValueStore = Depends(get_store)):
    return ThemePreference(theme=toggle_theme(store))
