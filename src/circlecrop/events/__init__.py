from .bus import Event, EventBus, Subscription
from .image_events import ImageLoadedEvent, ImageLoadFailedEvent

__all__ = [
    "Event",
    "EventBus",
    "ImageLoadFailedEvent",
    "ImageLoadedEvent",
    "Subscription",
]
