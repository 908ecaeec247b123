# backend/elakitty/api/routers/profiles.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from elakitty.api.deps import allow
from elakitty.crud import profile as crud
from elakitty.db import get_db
from elakitty.models.profile import Profile
from elakitty.schemas.profile import ProfileOut, RoleIn
from elakitty.services.access.role_gate import Action
from elakitty.services.access.viewer import Viewer

router = APIRouter()


def profile_out(p: Profile) -> ProfileOut:
    return ProfileOut(id=p.id, email=p.email, role=p.role, created_at=p.created_at)


@router.get("")
@router.get("/")
def list_profiles(
    viewer: Viewer = Depends(allow(Action.VIEW_DASHBOARD)), db: Session = Depends(get_db)
) -> list[ProfileOut]:
    return [profile_out(p) for p in crud.list_profiles(db, viewer)]


@router.get("/caregivers")
def list_caregivers(
    viewer: Viewer = Depends(allow(Action.VIEW_DASHBOARD)), db: Session = Depends(get_db)
) -> list[ProfileOut]:
    return [profile_out(p) for p in crud.list_caregivers(db, viewer)]


@router.patch("/{profile_id}/role")
def switch_role(
    profile_id: str,
    payload: RoleIn,
    viewer: Viewer = Depends(allow(Action.SWITCH_ROLE)),
    db: Session = Depends(get_db),
) -> ProfileOut:
    return profile_out(crud.switch_role(db, viewer, profile_id, payload.role))
