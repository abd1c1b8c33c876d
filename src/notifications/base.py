"""Abstract base class for notification dispatchers."""

from abc import ABC, abstractmethod

from src.core.schemas import Notification


class NotificationDispatcher(ABC):
    """Delivers a notification to one user."""

    @abstractmethod
    async def send(self, user_id: str, notification: Notification) -> bool:
        """Deliver a notification.

        Returns True on success, False on a delivery failure. Implementations
        should report failures through the return value rather than raise.
        """
