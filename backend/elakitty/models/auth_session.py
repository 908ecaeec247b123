# backend/elakitty/models/auth_session.py
from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class AuthSession(Base):
    __tablename__ = "auth_sessions"
    token = Column(String(64), primary_key=True)
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)

    profile = relationship("Profile")
