from __future__ import annotations

from typing import Dict, List

from .session import Connection


class ViewerRegistry:
    def __init__(self) -> None:
        self._viewers: Dict[str, Connection] = {}

    def add(self, conn: Connection) -> None:
        self._viewers[conn.id] = conn

    def remove(self, conn: Connection) -> None:
        self._viewers.pop(conn.id, None)

    def snapshot(self) -> List[Connection]:
        # Fan-out iterates a copy so joins/leaves during delivery are safe
        return list(self._viewers.values())

    def __contains__(self, conn: object) -> bool:
        return isinstance(conn, Connection) and self._viewers.get(conn.id) is conn

    def __len__(self) -> int:
        return len(self._viewers)
