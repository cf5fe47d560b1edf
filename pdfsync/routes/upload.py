from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from ..core.errors import ArtifactTooLargeError, PayloadError
from ..models import UploadResponse


router = APIRouter()

# Room for the multipart boundaries and the passphrase field
FORM_OVERHEAD_BYTES = 64 * 1024


@router.post("/upload", response_model=UploadResponse)
async def upload_pdf(request: Request) -> UploadResponse:
    store = request.app.state.artifacts
    _check_content_length(request, store.max_bytes)

    form = await request.form(max_files=1, max_fields=8)
    try:
        if not request.app.state.coordinator.passphrases.matches(form.get("passphrase")):
            raise HTTPException(status_code=401, detail="Invalid passphrase")
        pdf = form.get("pdf")
        if not isinstance(pdf, UploadFile):
            raise HTTPException(status_code=400, detail="No PDF file uploaded")

        try:
            artifact = await run_in_threadpool(store.save, pdf.filename, pdf.content_type, pdf.file)
        except ArtifactTooLargeError as exc:
            raise HTTPException(status_code=413, detail=str(exc))
        except PayloadError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
    finally:
        await form.close()
    return UploadResponse(pdfUrl=artifact.url, filename=artifact.filename)


def _check_content_length(request: Request, max_bytes) -> None:
    """Refuse bodies that cannot fit before anything is spooled to disk."""
    if max_bytes is None:
        return
    raw = request.headers.get("content-length")
    if raw is None:
        raise HTTPException(status_code=411, detail="Content-Length required")
    try:
        length = int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid Content-Length")
    if length > max_bytes + FORM_OVERHEAD_BYTES:
        raise HTTPException(status_code=413, detail=f"PDF exceeds the {max_bytes} byte upload limit")
