from __future__ import annotations
from datetime import datetime
from typing import Optional

from pymongo import ASCENDING

from .schemas.types import IndexSpec, UserRecord

DEFAULT_DB = "backend_challenge"
USERS_COLLECTION = "users"

DEFAULT_INDEXES = (
    IndexSpec(field="email", order=ASCENDING, unique=True),
    IndexSpec(field="created_at", order=ASCENDING),
)

ADMIN_NAME = "Admin User"
ADMIN_EMAIL = "admin@example.com"
# bcrypt hash, cost 6
ADMIN_PASSWORD_HASH = "$2a$06$R.ga34oljt5UqXmSgNR6ze4QpEbq8u9i0Fui/eG2WpZs/nCgjbT1e"


def admin_seed_user(
    now: Optional[datetime] = None,
    *,
    name: str = ADMIN_NAME,
    email: str = ADMIN_EMAIL,
    password: str = ADMIN_PASSWORD_HASH,
) -> UserRecord:
    return UserRecord.new(name, email, password, now=now)
