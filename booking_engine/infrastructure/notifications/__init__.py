from booking_engine.infrastructure.notifications.logging_notifier import LoggingNotifier

__all__ = ["LoggingNotifier"]
