# backend/elakitty/schemas/sighting.py
from pydantic import BaseModel, Field
from typing import Optional
import datetime as dt

from elakitty.models.enums import Behaviour, Visibility


class SightingIn(BaseModel):
    latitude: float
    longitude: float
    notes: str = ""
    animals: int = Field(default=1, ge=1)
    behaviour: Behaviour = Behaviour.NORMAL
    photo_url: Optional[str] = None
    visibility: Visibility = Visibility.PUBLIC


class SightingOut(BaseModel):
    id: str
    latitude: float
    longitude: float
    notes: str = ""
    animals: int
    behaviour: Behaviour
    photo_url: Optional[str] = None
    visibility: Visibility
    owner_id: str
    created_at: dt.datetime
    can_delete: bool = False
