from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class PresenterAuth(BaseModel):
    # Any value reaches the passphrase check; non-strings never match
    passphrase: Any = None


class SetPdf(BaseModel):
    pdfUrl: str = Field(min_length=1)


class PageChange(BaseModel):
    page: int = Field(ge=1, strict=True)


class UploadResponse(BaseModel):
    success: bool = True
    pdfUrl: str
    filename: str


class HealthResponse(BaseModel):
    status: str = "ok"
    presenter: bool
    viewers: int
    pdfUrl: Optional[str] = None
    currentPage: int
