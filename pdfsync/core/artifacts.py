"""On-disk store for uploaded PDFs."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from .errors import ArtifactTooLargeError, PayloadError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
CHUNK_SIZE = 64 * 1024

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredArtifact:
    url: str
    filename: str
    path: Path


def safe_filename(name: Optional[str]) -> str:
    base = Path(name or "").name
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or "document.pdf"


class ArtifactStore:
    """Validates and writes PDFs, handing back the URL they are served from.

    Files land in ``upload_dir`` as ``<epoch-ms>-<name>``. A rejected or
    failed write never leaves a partial file behind.
    """

    def __init__(self, upload_dir: Path, url_prefix: str = "/uploads", max_bytes: Optional[int] = None) -> None:
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def save(self, original_name: Optional[str], content_type: Optional[str], stream: BinaryIO) -> StoredArtifact:
        if content_type != PDF_CONTENT_TYPE:
            raise PayloadError("Only PDF files are allowed")

        stored_name = f"{int(time.time() * 1000)}-{safe_filename(original_name)}"
        path = self.upload_dir / stored_name
        written = 0
        try:
            with path.open("wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if self.max_bytes is not None and written > self.max_bytes:
                        raise ArtifactTooLargeError(f"PDF exceeds the {self.max_bytes} byte upload limit")
                    out.write(chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.info("Stored upload %s (%d bytes)", stored_name, written)
        return StoredArtifact(
            url=f"{self.url_prefix}/{stored_name}",
            filename=original_name or stored_name,
            path=path,
        )
