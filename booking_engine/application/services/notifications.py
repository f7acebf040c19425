import logging
from collections.abc import Awaitable

logger = logging.getLogger(__name__)


async def notify_safely(notification: Awaitable[None], event: str, reservation_number: str) -> None:
    """Envía una notificación fire-and-forget; un fallo solo se registra."""
    try:
        await notification
    except Exception:
        logger.exception(
            "Notification failed",
            extra={"event": event, "reservation_number": reservation_number},
        )
