# backend/elakitty/schemas/sanctuary.py
from pydantic import BaseModel, Field
from typing import Any, Optional
import datetime as dt

from elakitty.models.enums import AreaMode
from .commons import Service


class SanctuaryIn(BaseModel):
    id: Optional[str] = None  # present → update, absent → insert
    name: str
    latitude: float
    longitude: float
    area_mode: AreaMode = AreaMode.RADIUS
    radius_km: Optional[float] = None
    boundary: Optional[Any] = None  # GeoJSON Feature/Polygon/MultiPolygon, or its JSON text
    approved: bool = False

    contact_email: str = ""
    contact_phone: str = ""
    donate_url: str = ""
    website_url: str = ""
    facebook_url: str = ""
    instagram_url: str = ""
    twitter_url: str = ""
    logo_url: str = ""
    services: list[Service] = Field(default_factory=list)
    opening_hours: Optional[dict[str, Any]] = None

    caregiver_ids: list[str] = Field(default_factory=list)


class SanctuaryOut(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    area_mode: AreaMode
    radius_km: Optional[float] = None
    boundary: Optional[dict] = None
    approved: bool

    contact_email: str = ""
    contact_phone: str = ""
    donate_url: str = ""
    website_url: str = ""
    facebook_url: str = ""
    instagram_url: str = ""
    twitter_url: str = ""
    logo_url: str = ""
    services: list[str] = Field(default_factory=list)
    opening_hours: Optional[dict[str, str]] = None
    opening_week: dict[str, dict] = Field(default_factory=dict)
    caregiver_ids: list[str] = Field(default_factory=list)
    created_at: dt.datetime


class ApprovalIn(BaseModel):
    approved: bool


class BoundaryIn(BaseModel):
    boundary: Any


class BoundaryOut(BaseModel):
    boundary: dict
    vertex_count: int
    area_km2: float
    centroid: dict
