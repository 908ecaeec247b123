# backend/elakitty/models/sanctuary.py
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, JSON, String, Text
from sqlalchemy.orm import relationship

from elakitty.errors import ValidationError
from elakitty.services.geofence.area import (
    PolygonArea,
    RadiusArea,
    boundary_text,
    from_drawn_shape,
)
from elakitty.services.geofence.point import GeoPoint
from .base import Base, new_id, utcnow


class Sanctuary(Base):
    __tablename__ = "sanctuaries"
    __table_args__ = (
        # exactly one service-area representation is stored
        CheckConstraint(
            "(radius_km IS NULL) <> (boundary IS NULL)", name="ck_sanctuary_single_area"
        ),
        CheckConstraint("radius_km IS NULL OR radius_km > 0", name="ck_sanctuary_radius"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    radius_km = Column(Float, nullable=True)
    boundary = Column(Text, nullable=True)  # GeoJSON Polygon text, [lng, lat], outer ring only
    approved = Column(Boolean, nullable=False, default=False)

    contact_email = Column(String, default="")
    contact_phone = Column(String, default="")
    donate_url = Column(String, default="")
    website_url = Column(String, default="")
    facebook_url = Column(String, default="")
    instagram_url = Column(String, default="")
    twitter_url = Column(String, default="")
    logo_url = Column(String, default="")
    services = Column(JSON, nullable=False, default=list)  # ["shelter", "tnr", ...]
    opening_hours = Column(JSON, nullable=True)  # {"mon": "09:00-17:00", "sun": "closed", ...}
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    caregiver_assignments = relationship(
        "CaregiverAssignment",
        back_populates="sanctuary",
        cascade="all, delete-orphan",
    )

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(lat=self.latitude, lng=self.longitude)

    @property
    def area(self) -> RadiusArea | PolygonArea:
        if self.boundary is not None and self.radius_km is not None:
            raise ValidationError("sanctuary has both a radius and a boundary")
        if self.boundary is not None:
            return from_drawn_shape(self.boundary)
        if self.radius_km is not None:
            return RadiusArea(self.radius_km)
        raise ValidationError("sanctuary has no service area")

    @property
    def caregiver_ids(self) -> list[str]:
        return sorted(a.caregiver_id for a in self.caregiver_assignments)

    def set_radius(self, km) -> "Sanctuary":
        area = RadiusArea(km)
        self.radius_km = float(area.km)
        self.boundary = None
        return self

    def set_boundary(self, vertices) -> "Sanctuary":
        area = vertices if isinstance(vertices, PolygonArea) else from_drawn_shape(vertices)
        self.boundary = boundary_text(area)
        self.radius_km = None
        return self

    def set_area(self, area: RadiusArea | PolygonArea) -> "Sanctuary":
        if isinstance(area, RadiusArea):
            return self.set_radius(area.km)
        return self.set_boundary(area)
