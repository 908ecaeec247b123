# backend/elakitty/models/profile.py
from sqlalchemy import Column, DateTime, Enum, String
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow
from .enums import Role, _values


class Profile(Base):
    __tablename__ = "profiles"
    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, nullable=False, index=True)
    role = Column(
        Enum(Role, values_callable=_values, native_enum=False, length=16),
        nullable=False,
        default=Role.USER,
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)

    assignments = relationship(
        "CaregiverAssignment",
        back_populates="caregiver",
        cascade="all, delete-orphan",
    )
