# backend/elakitty/models/sighting.py
from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Float, Integer, String, Text

from .base import Base, new_id, utcnow
from .enums import Behaviour, Visibility, _values


class Sighting(Base):
    __tablename__ = "sightings"
    __table_args__ = (CheckConstraint("animals >= 1", name="ck_sighting_animals"),)

    id = Column(String(36), primary_key=True, default=new_id)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    notes = Column(Text, default="")
    animals = Column(Integer, nullable=False, default=1)
    behaviour = Column(
        Enum(Behaviour, values_callable=_values, native_enum=False, length=16),
        nullable=False,
        default=Behaviour.NORMAL,
    )
    photo_url = Column(String, nullable=True)
    visibility = Column(
        Enum(Visibility, values_callable=_values, native_enum=False, length=16),
        nullable=False,
        default=Visibility.PUBLIC,
    )
    # no FK: the reporter's trace must survive account removal
    owner_id = Column(String(36), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
