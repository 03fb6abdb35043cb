from __future__ import annotations


class BootstrapError(Exception):
    """Base class for failures the bootstrap surfaces on its own."""


class CollectionExistsError(BootstrapError):
    def __init__(self, database: str, collection: str):
        super().__init__(f"collection {database}.{collection} already exists")
        self.database = database
        self.collection = collection


class UserAlreadyExistsError(BootstrapError):
    def __init__(self, email: str):
        super().__init__(f"user already exists: {email}")
        self.email = email


class InvalidUserDataError(BootstrapError, ValueError):
    pass
