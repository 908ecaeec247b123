# backend/elakitty/models/caregiver_assignment.py
from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from .base import Base


class CaregiverAssignment(Base):
    __tablename__ = "caregiver_assignments"
    caregiver_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True
    )
    sanctuary_id = Column(
        String(36), ForeignKey("sanctuaries.id", ondelete="CASCADE"), primary_key=True
    )

    caregiver = relationship("Profile", back_populates="assignments")
    sanctuary = relationship("Sanctuary", back_populates="caregiver_assignments")
