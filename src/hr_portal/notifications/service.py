from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import now_millis
from ..core.enums import NotificationType
from .model import NewNotification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Best-effort notification emission.

    A failed write is logged and swallowed: the state transition that triggered
    it has already been committed and is not rolled back.
    """

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def notify(
        self,
        *,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType,
        link: Optional[str] = None,
    ) -> Optional[str]:
        notification = NewNotification(
            user_id=str(user_id),
            title=title,
            message=message,
            type=type.value,
            read=False,
            created_at=now_millis(),
            link=link,
        )
        try:
            return self._notifications.create(notification)
        except Exception:
            logger.exception("notification write failed", extra={"user_id": user_id, "title": title})
            return None
