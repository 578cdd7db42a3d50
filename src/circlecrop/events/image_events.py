from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .bus import Event
from ..core.layout import ImageMetrics


@dataclass(kw_only=True)
class ImageLoadedEvent(Event):
    source: Optional[Path]
    metrics: ImageMetrics


@dataclass(kw_only=True)
class ImageLoadFailedEvent(Event):
    source: Optional[Path]
    reason: str
