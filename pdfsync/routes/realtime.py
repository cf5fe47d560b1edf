from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from ..core.coordinator import PresentationCoordinator
from ..core.errors import AuthorizationError, SyncError
from ..core.session import Connection
from ..models import PageChange, PresenterAuth, SetPdf

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def presentation_ws(ws: WebSocket):
    coordinator: PresentationCoordinator = ws.app.state.coordinator
    await ws.accept()
    conn = coordinator.connect(ws)
    try:
        while True:
            raw = await ws.receive_text()
            await handle_message(coordinator, conn, raw)
    except WebSocketDisconnect:
        pass
    finally:
        coordinator.disconnect(conn)


async def handle_message(coordinator: PresentationCoordinator, conn: Connection, raw: str) -> None:
    try:
        data = json.loads(raw)
    except ValueError:
        await conn.send("error", message="Invalid JSON")
        return
    if not isinstance(data, dict):
        await conn.send("error", message="Messages must be JSON objects")
        return

    typ = data.get("type")
    try:
        if typ == "presenter_auth":
            auth = PresenterAuth.model_validate(data)
            await coordinator.authenticate(conn, auth.passphrase)
        elif typ == "viewer_join":
            await coordinator.join_as_viewer(conn)
        elif typ == "set_pdf":
            pdf = SetPdf.model_validate(data)
            await coordinator.set_document(conn, pdf.pdfUrl)
        elif typ == "page_change":
            change = PageChange.model_validate(data)
            await coordinator.set_page(conn, change.page)
        elif typ == "ping":
            await conn.send("pong")
        else:
            await conn.send("error", message=f"Unknown event type: {typ!r}")
    except AuthorizationError as exc:
        await conn.send("auth_error", message=str(exc))
    except SyncError as exc:
        await conn.send("error", message=str(exc))
    except ValidationError as exc:
        logger.info("Invalid %s payload from %s: %d error(s)", typ, conn.id, exc.error_count())
        await conn.send("error", message=f"Invalid payload for {typ}")
