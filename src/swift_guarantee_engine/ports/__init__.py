from .background_worker import IBackgroundWorker
from .middleware import IMiddleware
from .notifications import INotificationPublisher
from .store import IMessageStore
from .validation import IMessageCheck

__all__ = [
    "IBackgroundWorker",
    "IMessageCheck",
    "IMessageStore",
    "IMiddleware",
    "INotificationPublisher",
]
