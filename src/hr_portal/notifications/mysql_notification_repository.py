from __future__ import annotations

import uuid
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchone
from .model import NewNotification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, notification: NewNotification) -> str:
        notification_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(
                    notification_id, user_id, recipient_id, company_id, type,
                    title, message, is_read, link, metadata, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    notification_id,
                    notification.user_id,
                    notification.recipient_id,
                    notification.company_id,
                    notification.type,
                    notification.title,
                    notification.message,
                    1 if notification.read else 0,
                    notification.link,
                    dump_json(notification.metadata),
                    int(notification.created_at),
                ),
            )
        return notification_id

    def exists(self, *, user_id: str, type: str, company_id: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notification_id
                FROM notifications
                WHERE user_id=%s AND type=%s AND company_id <=> %s
                LIMIT 1
                """,
                (str(user_id), type, company_id),
            )
            return fetchone(cur) is not None
