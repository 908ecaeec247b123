# backend/elakitty/schemas/profile.py
from pydantic import BaseModel
import datetime as dt

from elakitty.models.enums import Role


class ProfileOut(BaseModel):
    id: str
    email: str
    role: Role
    created_at: dt.datetime


class RoleIn(BaseModel):
    role: Role


class SessionIn(BaseModel):
    email: str


class SessionOut(BaseModel):
    token: str
    profile: ProfileOut
