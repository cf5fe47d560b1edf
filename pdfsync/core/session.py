from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Role(Enum):
    UNAUTHENTICATED = "unauthenticated"
    PRESENTER = "presenter"
    VIEWER = "viewer"


@dataclass(eq=False)
class Connection:
    """One client socket plus the role it was granted.

    ``socket`` is owned by the transport; anything with an async
    ``send_json`` works (FastAPI's ``WebSocket`` in production).
    """

    socket: Any
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    role: Role = Role.UNAUTHENTICATED

    async def send(self, event: str, **payload: Any) -> None:
        await self.socket.send_json({"type": event, **payload})


@dataclass
class Session:
    pdf_url: Optional[str] = None
    current_page: int = 1
    presenter: Optional[Connection] = None

    @property
    def has_document(self) -> bool:
        return self.pdf_url is not None

    def set_document(self, pdf_url: str) -> None:
        self.pdf_url = pdf_url
        self.current_page = 1

    def set_page(self, page: int) -> None:
        if page < 1:
            raise ValueError("page must be a positive integer")
        self.current_page = page

    def snapshot(self) -> Dict[str, Any]:
        return {"pdfUrl": self.pdf_url, "currentPage": self.current_page}
