from django.db import models


class NotificationLevel(models.TextChoices):
    INFO = 'info', 'Info'
    SUCCESS = 'success', 'Success'
    ERROR = 'error', 'Error'


class Notification:
    """A transient message for the operator (toast)."""

    def __init__(self, level, message):
        self.level = level
        self.message = message

    def to_dict(self):
        return {'level': str(self.level), 'message': self.message}

    def __repr__(self):
        return f"<Notification {self.level}: {self.message}>"


class Notifier:
    """Collects notifications raised while handling one request."""

    def __init__(self):
        self._pending = []

    def notify(self, level, message):
        self._pending.append(Notification(level, message))

    def info(self, message):
        self.notify(NotificationLevel.INFO, message)

    def success(self, message):
        self.notify(NotificationLevel.SUCCESS, message)

    def error(self, message):
        self.notify(NotificationLevel.ERROR, message)

    def drain(self):
        """Return pending notifications as dicts and forget them."""
        pending, self._pending = self._pending, []
        return [notification.to_dict() for notification in pending]
