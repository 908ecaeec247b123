# backend/elakitty/models/enums.py
from enum import Enum


class Role(str, Enum):
    ANONYMOUS = "anonymous"
    USER = "user"
    CAREGIVER = "caregiver"
    ADMIN = "admin"


# roles a stored profile may carry; anonymous only exists for requests without a session
ASSIGNABLE_ROLES = (Role.USER, Role.CAREGIVER, Role.ADMIN)


class Visibility(str, Enum):
    PUBLIC = "public"
    CAREGIVER_ONLY = "caregiver"
    ADMIN_ONLY = "admin"


class Behaviour(str, Enum):
    NORMAL = "normal"
    INJURED = "injured"


class AreaMode(str, Enum):
    RADIUS = "radius"
    POLYGON = "polygon"


def _values(enum_cls):
    return [m.value for m in enum_cls]
