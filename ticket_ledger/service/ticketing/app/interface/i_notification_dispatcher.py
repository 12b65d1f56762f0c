from abc import ABC, abstractmethod
from typing import Any, Dict


class INotificationDispatcher(ABC):
    """Hands templated notifications (refund decisions, ...) to a delivery channel"""

    @abstractmethod
    async def send_notification(self, *, kind: str, data: Dict[str, Any]) -> None:
        pass
