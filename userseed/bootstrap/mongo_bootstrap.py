"""Bring a fresh MongoDB database to a minimally usable state.

The runner issues its effects in a fixed order against the database handle it
is given: collection, indexes, then the seed user. Nothing is rolled back when
a step fails; the driver error propagates and the run stops there.

Re-running against an already bootstrapped database is a no-op by default.
The unique index on ``email`` rejects the second seed insert, which is then
reported as ``seed_inserted=False``. With ``strict=True`` both the existing
collection and the duplicate seed raise instead.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Iterable, Optional

from pymongo.errors import DuplicateKeyError

from ..errors import UserAlreadyExistsError
from ..mongo_client import ensure_collection, ensure_indexes, index_summary
from ..schemas.types import BootstrapResult, IndexSpec, UserRecord
from ..seed import ADMIN_EMAIL, DEFAULT_INDEXES, USERS_COLLECTION, admin_seed_user

logger = logging.getLogger(__name__)


def insert_seed(coll, seed: UserRecord, *, strict: bool = False) -> bool:
    try:
        coll.insert_one(seed.to_document())
    except DuplicateKeyError as exc:
        if strict:
            raise UserAlreadyExistsError(seed.email) from exc
        logger.info(
            "seed user already present",
            extra={"stage": "bootstrap.seed", "email": seed.email},
        )
        return False
    logger.info(
        "seed user inserted",
        extra={"stage": "bootstrap.seed", "email": seed.email},
    )
    return True


def bootstrap_mongo(
    db,
    *,
    collection: str = USERS_COLLECTION,
    indexes: Iterable[IndexSpec] = DEFAULT_INDEXES,
    seed: Optional[UserRecord] = None,
    strict: bool = False,
    now: Optional[datetime] = None,
) -> BootstrapResult:
    seed = seed or admin_seed_user(now)

    created = ensure_collection(db, collection, strict=strict)
    names = ensure_indexes(db, collection, indexes)
    inserted = insert_seed(db[collection], seed, strict=strict)

    return BootstrapResult(
        database=db.name,
        collection=collection,
        collection_created=created,
        indexes=names,
        seed_inserted=inserted,
        seed_email=seed.email,
    )


def verify_bootstrap(
    db,
    *,
    collection: str = USERS_COLLECTION,
    indexes: Iterable[IndexSpec] = DEFAULT_INDEXES,
    seed_email: str = ADMIN_EMAIL,
) -> dict:
    """Report how far ``db`` matches the bootstrapped layout."""
    exists = collection in db.list_collection_names()
    present = index_summary(db, collection) if exists else {}

    index_report = {}
    for spec in indexes:
        info = present.get(spec.name)
        index_report[spec.name] = bool(
            info
            and info["keys"] == spec.keys
            and info["unique"] == spec.unique
        )

    seed_count = db[collection].count_documents({"email": seed_email}) if exists else 0
    ok = exists and all(index_report.values()) and seed_count == 1
    return {
        "database": db.name,
        "collection": collection,
        "collection_exists": exists,
        "indexes": index_report,
        "seed_email": seed_email,
        "seed_count": seed_count,
        "ok": ok,
    }
