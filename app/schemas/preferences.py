"""User preference schemas."""

from typing import Literal

from pydantic import BaseModel

Theme = Literal["dark", "light"]


class ThemePreference(BaseModel):
    theme: Theme
