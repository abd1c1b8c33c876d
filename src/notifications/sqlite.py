"""In-app notifications stored in the local SQLite database."""

import logging
import sqlite3

from src.core.db import insert_notification
from src.core.schemas import Notification
from src.notifications.base import NotificationDispatcher

logger = logging.getLogger(__name__)


class SQLiteNotificationDispatcher(NotificationDispatcher):
    """Writes one row per notification to the ``notifications`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def send(self, user_id: str, notification: Notification) -> bool:
        try:
            row_id = insert_notification(self._conn, user_id, notification)
        except sqlite3.Error as e:
            logger.warning("Failed to store notification for '%s': %s", user_id, e)
            return False
        logger.debug("Stored %s notification %d for '%s'", notification.type, row_id, user_id)
        return True
