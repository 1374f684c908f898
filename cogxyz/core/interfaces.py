"""
cogxyz Pipeline Observer Protocol

Hook invoked at fixed checkpoints of the tile pipeline so callers (and tests)
can follow what happened to a tile without parsing log text.

Checkpoints emitted:
- tile_bbox: Mercator footprint of the requested tile
- overlap: whether the footprint overlaps the COG extent
- level: COG pyramid level resolved for the tile zoom
- window: pixel window computed for the shared footprint
- tile_rendered: encoded bitmap produced (or None for no data)
"""

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class PipelineObserver(Protocol):
    """Receives pipeline checkpoint events"""

    def event(self, name: str, **fields: Any) -> None:
        """
        Record one checkpoint

        Args:
            name: Checkpoint name (e.g. "overlap")
            **fields: Checkpoint values (tile, bbox, level, window, ...)
        """
        ...


class LoggingObserver:
    """Default observer: forwards every checkpoint to the debug log"""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def event(self, name: str, **fields: Any) -> None:
        if self.log.isEnabledFor(logging.DEBUG):
            details = " ".join(f"{key}={value}" for key, value in fields.items())
            self.log.debug("%s %s", name, details)
