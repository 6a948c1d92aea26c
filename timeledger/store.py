"""Collaborator interfaces for log and catalog storage."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional

from timeledger.schema import (
    DEFAULT_ACTIVITY_TYPES,
    DEFAULT_SATISFACTION_TAGS,
    ActivityType,
    SatisfactionTag,
    TimeLog,
)

logger = logging.getLogger(__name__)


class LogStore(ABC):
    """Source of a user's time logs."""

    @abstractmethod
    def list_logs(self, user_id: str) -> list[TimeLog]:
        raise NotImplementedError

    @abstractmethod
    def list_logs_for_day(self, user_id: str, day: date) -> list[TimeLog]:
        raise NotImplementedError

    @abstractmethod
    def insert_log(self, log: TimeLog) -> TimeLog:
        """Persist a log that already passed validation."""
        raise NotImplementedError


class CatalogStore(ABC):
    """Read-only access to activity types and satisfaction tags."""

    @abstractmethod
    def list_activity_types(self) -> list[ActivityType]:
        raise NotImplementedError

    @abstractmethod
    def list_satisfaction_tags(self) -> list[SatisfactionTag]:
        raise NotImplementedError


class InMemoryStore(LogStore, CatalogStore):
    """Process-local store holding logs and the category/tag catalog."""

    def __init__(
        self,
        logs: Iterable[TimeLog] = (),
        activity_types: Optional[Iterable[ActivityType]] = None,
        satisfaction_tags: Optional[Iterable[SatisfactionTag]] = None,
    ):
        self._logs: list[TimeLog] = []
        self._ids: set[str] = set()
        self._activity_types = list(DEFAULT_ACTIVITY_TYPES if activity_types is None else activity_types)
        self._satisfaction_tags = list(DEFAULT_SATISFACTION_TAGS if satisfaction_tags is None else satisfaction_tags)
        for log in logs:
            self.insert_log(log)

    def list_logs(self, user_id: str) -> list[TimeLog]:
        return [log for log in self._logs if log.user_id == user_id]

    def list_logs_for_day(self, user_id: str, day: date) -> list[TimeLog]:
        return [log for log in self._logs if log.user_id == user_id and log.date == day]

    def insert_log(self, log: TimeLog) -> TimeLog:
        if log.id in self._ids:
            raise ValueError(f"Log {log.id}: duplicate id")
        self._logs.append(log)
        self._ids.add(log.id)
        logger.debug("Stored log %s for user %s on %s", log.id, log.user_id, log.date)
        return log

    def list_activity_types(self) -> list[ActivityType]:
        return list(self._activity_types)

    def list_satisfaction_tags(self) -> list[SatisfactionTag]:
        return list(self._satisfaction_tags)
