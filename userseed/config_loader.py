from __future__ import annotations
from pathlib import Path
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field
import yaml

from .seed import (
    ADMIN_EMAIL,
    ADMIN_NAME,
    ADMIN_PASSWORD_HASH,
    DEFAULT_DB,
    USERS_COLLECTION,
)

logger = logging.getLogger(__name__)


class MongoConfig(BaseModel):
    uri: str
    db: str = Field(default=DEFAULT_DB)
    server_selection_timeout_ms: Optional[int] = None


class BootstrapConfig(BaseModel):
    collection: str = Field(default=USERS_COLLECTION)
    strict: bool = False


class SeedConfig(BaseModel):
    name: str = Field(default=ADMIN_NAME)
    email: str = Field(default=ADMIN_EMAIL)
    password: str = Field(default=ADMIN_PASSWORD_HASH)


class Settings(BaseModel):
    mongo: MongoConfig
    bootstrap: BootstrapConfig = Field(default_factory=BootstrapConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)


def _load_yaml(path: str | os.PathLike) -> dict:
    p = Path(path)
    if not p.exists():
        logger.error(f"Config file {p} does not exist")
        return {}
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(config_path: str = "config.yaml") -> Settings:
    load_dotenv(override=False)

    data = _load_yaml(config_path)
    mongo = data.get("mongo", {}) or {}

    # Allow env overrides for the connection
    env_overrides = {
        "mongo": {
            "uri": os.getenv("MONGODB_URI", mongo.get("uri")),
            "db": os.getenv("MONGODB_DB", mongo.get("db", DEFAULT_DB)),
        },
    }

    # Merge shallowly; an empty YAML section loads as None
    merged = {
        **data,
        **{key: data.get(key) or {} for key in ("bootstrap", "seed")},
        "mongo": {**mongo, **env_overrides["mongo"]},
    }
    return Settings(**merged)
