from __future__ import annotations
import logging
from typing import Iterable

from pymongo import MongoClient
from pymongo.errors import CollectionInvalid, OperationFailure

from .config_loader import Settings
from .errors import CollectionExistsError
from .schemas.types import IndexSpec

logger = logging.getLogger(__name__)

NAMESPACE_EXISTS = 48


def get_client(s: Settings) -> MongoClient:
    kwargs = {}
    if s.mongo.server_selection_timeout_ms is not None:
        kwargs["serverSelectionTimeoutMS"] = s.mongo.server_selection_timeout_ms
    return MongoClient(s.mongo.uri, **kwargs)


def get_db(s: Settings, client: MongoClient):
    return client[s.mongo.db]


def _lost_create_race(db, name: str, strict: bool) -> bool:
    if strict:
        raise CollectionExistsError(db.name, name) from None
    logger.info(
        "collection created concurrently",
        extra={"stage": "bootstrap.collection", "collection": name},
    )
    return False


def ensure_collection(db, name: str, *, strict: bool = False) -> bool:
    """Create collection ``name`` on ``db``; return whether it was created.

    An existing collection is left untouched, or raises
    ``CollectionExistsError`` when ``strict`` is set.
    """
    if name in db.list_collection_names():
        if strict:
            raise CollectionExistsError(db.name, name)
        logger.info(
            "collection already exists",
            extra={"stage": "bootstrap.collection", "collection": name},
        )
        return False
    try:
        db.create_collection(name)
    except CollectionInvalid:
        # the driver saw the collection after our listing
        return _lost_create_race(db, name, strict)
    except OperationFailure as exc:
        # the server created it for someone else after our listing
        if exc.code != NAMESPACE_EXISTS:
            raise
        return _lost_create_race(db, name, strict)
    logger.info(
        "collection created",
        extra={"stage": "bootstrap.collection", "collection": name},
    )
    return True


def ensure_indexes(db, collection: str, indexes: Iterable[IndexSpec]) -> list[str]:
    # create_index is a no-op on the server when an identical index exists
    names = []
    for spec in indexes:
        name = db[collection].create_index(spec.keys, unique=spec.unique)
        logger.info(
            "index ensured",
            extra={
                "stage": "bootstrap.indexes",
                "collection": collection,
                "index": name,
                "unique": spec.unique,
            },
        )
        names.append(name)
    return names


def index_summary(db, collection: str) -> dict[str, dict]:
    out = {}
    for name, info in db[collection].index_information().items():
        out[name] = {
            "keys": [(field, order) for field, order in info.get("key", [])],
            "unique": bool(info.get("unique", False)),
        }
    return out
