"""
Member preference use cases: save-or-update and lookup by username.

One PreferenceService instance serves one PreferenceKind.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from redfin_api.domain.preferences import PreferenceKind
from redfin_api.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)


class PreferenceError(Exception):
    """Base exception for preference workflow."""


class MemberNotFoundError(PreferenceError):
    """Raised when the username does not belong to any member."""

    def __init__(self, username: str):
        super().__init__(f"Member '{username}' not found")
        self.username = username


class PreferenceService:
    """Stores at most one value of a preference kind per member."""

    def __init__(self, kind: PreferenceKind, repository: SQLRepository | None = None) -> None:
        self.kind = kind
        self.repository = repository or SQLRepository()

    def upsert(self, username: str, value: str) -> None:
        member = self.repository.get_member(username)
        if member is None:
            logger.warning("Cannot save %s: unknown member %r", self.kind.name, username)
            raise MemberNotFoundError(username)

        existing = self.repository.find_preference(self.kind.model, member.id)
        if existing is not None:
            self.kind.apply(existing, value)
            self.repository.save_preference(existing)
            logger.info("Updated %s for member %s", self.kind.name, member.id)
            return

        try:
            self.repository.save_preference(self.kind.build(member.id, value))
        except IntegrityError:
            # another writer created the row between our read and insert
            existing = self.repository.find_preference(self.kind.model, member.id)
            if existing is None:
                raise
            self.kind.apply(existing, value)
            self.repository.save_preference(existing)
            logger.info("Updated %s for member %s (concurrent insert)", self.kind.name, member.id)
        else:
            logger.info("Created %s for member %s", self.kind.name, member.id)

    def query(self, username: str) -> str | None:
        member = self.repository.get_member(username)
        if member is None:
            return None
        record = self.repository.find_preference(self.kind.model, member.id)
        if record is None:
            return None
        return self.kind.value_of(record)
