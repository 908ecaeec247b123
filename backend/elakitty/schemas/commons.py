# backend/elakitty/schemas/commons.py
from pydantic import BaseModel, Field
from typing import Literal, Optional

Service = Literal["shelter", "tnr", "vet-care", "adoption"]


class GeoJSONFeature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: dict
    properties: dict


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[GeoJSONFeature] = Field(default_factory=list)


class LocationOut(BaseModel):
    latitude: float
    longitude: float
    address: Optional[str] = None


class OkOut(BaseModel):
    ok: bool = True
