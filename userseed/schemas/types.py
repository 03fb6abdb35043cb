from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field
from pymongo import ASCENDING

from ..errors import InvalidUserDataError
from ..utils.time import as_utc, truncate_to_ms, utc_now


class IndexSpec(BaseModel):
    field: str
    order: int = Field(default=ASCENDING)
    unique: bool = False

    @property
    def keys(self) -> list[tuple[str, int]]:
        return [(self.field, self.order)]

    @property
    def name(self) -> str:
        # same name the server generates for a single-field index
        return f"{self.field}_{self.order}"


class UserRecord(BaseModel):
    name: str
    email: str
    password: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(
        cls,
        name: str,
        email: str,
        hashed_password: str,
        now: Optional[datetime] = None,
    ) -> "UserRecord":
        """Build a record stamped with a single creation instant.

        ``hashed_password`` is stored as given; it is never inspected or
        re-hashed.
        """
        if not name or not email or not hashed_password:
            raise InvalidUserDataError("name, email, and password are required")
        ts = truncate_to_ms(as_utc(now)) if now is not None else utc_now()
        return cls(
            name=name,
            email=email,
            password=hashed_password,
            created_at=ts,
            updated_at=ts,
        )

    def to_document(self) -> dict:
        return self.model_dump()


class BootstrapResult(BaseModel):
    database: str
    collection: str
    collection_created: bool
    indexes: List[str] = Field(default_factory=list)
    seed_inserted: bool
    seed_email: str
