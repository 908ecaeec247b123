# backend/elakitty/api/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from elakitty.api.deps import bearer_token, get_user
from elakitty.api.routers.profiles import profile_out
from elakitty.config import settings
from elakitty.crud import auth as crud
from elakitty.crud.profile import get_or_create_profile, get_profile
from elakitty.db import get_db
from elakitty.errors import AuthorizationError
from elakitty.schemas.commons import OkOut
from elakitty.schemas.profile import ProfileOut, SessionIn, SessionOut
from elakitty.services.access.viewer import Viewer

router = APIRouter()


@router.post("/session")
def open_session(payload: SessionIn, db: Session = Depends(get_db)) -> SessionOut:
    """Development sign-in by email; production sessions come from the identity provider."""
    if not settings.allow_dev_login:
        raise AuthorizationError("Email sign-in is disabled")
    profile = get_or_create_profile(db, payload.email)
    session = crud.create_session(db, profile)
    return SessionOut(token=session.token, profile=profile_out(profile))


@router.get("/me")
def me(viewer: Viewer = Depends(get_user), db: Session = Depends(get_db)) -> ProfileOut:
    return profile_out(get_profile(db, viewer.id))


@router.delete("/session")
def close_session(
    token: str | None = Depends(bearer_token), db: Session = Depends(get_db)
) -> OkOut:
    if token:
        crud.end_session(db, token)
    return OkOut()
