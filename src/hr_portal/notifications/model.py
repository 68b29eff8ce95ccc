from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NewNotification:
    """Notification record as written to the store.

    `user_id` is the addressee for review notifications; probation reminders
    keep the employee in `user_id` and the HR addressee in `recipient_id`.
    """

    user_id: str
    title: str
    message: str
    type: str
    created_at: int
    read: bool = False
    link: Optional[str] = None
    recipient_id: Optional[str] = None
    company_id: Optional[str] = None
    metadata: Optional[dict] = None
