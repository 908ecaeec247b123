# backend/elakitty/models/deletion_log.py
"""Append-only trail of sighting deletions: who deleted what, and why."""
from sqlalchemy import CheckConstraint, Column, DateTime, String, Text, event

from .base import Base, new_id, utcnow


class DeletionLog(Base):
    __tablename__ = "deletion_logs"
    __table_args__ = (CheckConstraint("length(trim(reason)) > 0", name="ck_deletion_reason"),)

    id = Column(String(36), primary_key=True, default=new_id)
    # the sighting row is gone once the log is written, so no FK
    sighting_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(36), nullable=False)
    reason = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


@event.listens_for(DeletionLog, "before_update")
def _refuse_update(mapper, connection, target):
    raise ValueError("deletion_logs rows are immutable")


@event.listens_for(DeletionLog, "before_delete")
def _refuse_delete(mapper, connection, target):
    raise ValueError("deletion_logs rows are immutable")
