from __future__ import annotations

from typing import Optional, Protocol

from .model import NewNotification


class NotificationRepository(Protocol):
    def create(self, notification: NewNotification) -> str:
        raise NotImplementedError

    def exists(self, *, user_id: str, type: str, company_id: Optional[str]) -> bool:
        """Pre-write check used to avoid sending the same reminder twice."""

        raise NotImplementedError
