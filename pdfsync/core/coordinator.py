"""Presenter admission, viewer tracking and state propagation.

All handlers run on the server's event loop. Each one commits its state
change before the first ``await``, so the session and viewer set are never
observed half-updated by another handler.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .errors import AuthorizationError, PermissionDeniedError
from .events import Broadcaster
from .passphrase import PassphraseManager
from .registry import ViewerRegistry
from .session import Connection, Role, Session

logger = logging.getLogger(__name__)


class PresentationCoordinator:
    def __init__(
        self,
        passphrases: Optional[PassphraseManager] = None,
        session: Optional[Session] = None,
        viewers: Optional[ViewerRegistry] = None,
    ) -> None:
        self.passphrases = passphrases or PassphraseManager()
        self.session = session or Session()
        self.viewers = viewers or ViewerRegistry()
        self._broadcaster = Broadcaster(self.viewers)

    def connect(self, socket: Any) -> Connection:
        conn = Connection(socket)
        logger.info("Client connected: %s", conn.id)
        return conn

    async def authenticate(self, conn: Connection, claimed: Any) -> None:
        if not self.passphrases.matches(claimed):
            logger.info("Presenter auth rejected for %s: invalid passphrase", conn.id)
            raise AuthorizationError("Invalid passphrase")

        if conn.role is Role.PRESENTER:
            logger.info("Presenter %s re-authenticated", conn.id)
        elif conn.role is Role.VIEWER:
            logger.info("Presenter auth rejected for %s: already a viewer", conn.id)
            raise AuthorizationError("Viewers cannot become the presenter")
        elif conn.role is Role.UNAUTHENTICATED:
            if self.session.presenter is not None:
                logger.info("Presenter auth rejected for %s: slot occupied", conn.id)
                raise AuthorizationError("Another presenter is already connected")
            self.session.presenter = conn
            conn.role = Role.PRESENTER
            logger.info("Presenter authenticated: %s", conn.id)

        await conn.send("auth_success", message="Presenter authenticated successfully")
        if self.session.has_document:
            await conn.send("pdf_status", **self.session.snapshot())

    async def join_as_viewer(self, conn: Connection) -> None:
        if conn.role is Role.PRESENTER:
            raise PermissionDeniedError("Presenter cannot join as a viewer")
        conn.role = Role.VIEWER
        self.viewers.add(conn)
        logger.info("Viewer joined: %s (%d total viewers)", conn.id, len(self.viewers))
        if self.session.has_document:
            await conn.send("pdf_update", **self.session.snapshot())

    async def set_document(self, conn: Connection, pdf_url: str) -> int:
        self._require_presenter(conn, "Unauthorized: Only presenter can set PDF")
        self.session.set_document(pdf_url)
        logger.info("PDF set by presenter: %s", pdf_url)
        return await self._broadcaster.fan_out("pdf_update", self.session.snapshot())

    async def set_page(self, conn: Connection, page: int) -> int:
        self._require_presenter(conn, "Unauthorized: Only presenter can change pages")
        self.session.set_page(page)
        logger.info("Page changed to: %d", page)
        return await self._broadcaster.fan_out("page_update", {"currentPage": page})

    def disconnect(self, conn: Connection) -> None:
        logger.info("Client disconnected: %s", conn.id)
        # A connection never holds both roles, so both checks run unconditionally
        if conn.role is Role.PRESENTER:
            if self.session.presenter is conn:
                self.session.presenter = None
            self.passphrases.rotate()
            logger.info("Presenter disconnected")
            logger.info("New presenter passphrase: %s", self.passphrases.current)
        if conn.role is Role.VIEWER:
            self.viewers.remove(conn)
            logger.info("Viewer left: %s (%d remaining viewers)", conn.id, len(self.viewers))

    def status(self) -> Dict[str, Any]:
        return {
            "presenter": self.session.presenter is not None,
            "viewers": len(self.viewers),
            **self.session.snapshot(),
        }

    def _require_presenter(self, conn: Connection, message: str) -> None:
        if conn.role is not Role.PRESENTER or self.session.presenter is not conn:
            logger.info("Rejected presenter-only action from %s", conn.id)
            raise PermissionDeniedError(message)
