# backend/elakitty/crud/auth.py
import secrets

from sqlalchemy.orm import Session

from elakitty.models.auth_session import AuthSession
from elakitty.models.profile import Profile
from .common import commit_or_raise


def create_session(db: Session, profile: Profile) -> AuthSession:
    session = AuthSession(token=secrets.token_urlsafe(32), profile_id=profile.id)
    db.add(session)
    commit_or_raise(db, "session")
    db.refresh(session)
    return session


def resolve_token(db: Session, token: str) -> Profile | None:
    session = db.get(AuthSession, token)
    return session.profile if session else None


def end_session(db: Session, token: str) -> None:
    session = db.get(AuthSession, token)
    if session:
        db.delete(session)
        commit_or_raise(db, "sign out")
