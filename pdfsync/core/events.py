from __future__ import annotations

import logging
from typing import Any, Dict

from .registry import ViewerRegistry

logger = logging.getLogger(__name__)


class Broadcaster:
    """Best-effort fan-out of one event to every registered viewer."""

    def __init__(self, viewers: ViewerRegistry) -> None:
        self._viewers = viewers

    async def fan_out(self, event: str, payload: Dict[str, Any]) -> int:
        delivered = 0
        for conn in self._viewers.snapshot():
            try:
                await conn.send(event, **payload)
                delivered += 1
            except Exception as exc:
                # Viewer is dropped when its disconnect is processed
                logger.warning("Failed to deliver %s to viewer %s: %s", event, conn.id, exc)
        return delivered
