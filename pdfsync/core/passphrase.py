"""Presenter passphrase generation and rotation."""

from __future__ import annotations

import hmac
import secrets
from typing import Any, Optional

MIN_PASSPHRASE_BYTES = 8


class PassphraseManager:
    """Holds the single passphrase that gates presenter admission and uploads.

    Exactly one passphrase is valid at a time. ``rotate`` replaces it, after
    which the previous value no longer matches.
    """

    def __init__(self, nbytes: int = MIN_PASSPHRASE_BYTES, initial: Optional[str] = None) -> None:
        if nbytes < MIN_PASSPHRASE_BYTES:
            raise ValueError(f"Passphrase must use at least {MIN_PASSPHRASE_BYTES} random bytes")
        self._nbytes = nbytes
        self._current = initial or self.generate()

    @property
    def current(self) -> str:
        return self._current

    def generate(self) -> str:
        return secrets.token_hex(self._nbytes)

    def rotate(self) -> str:
        self._current = self.generate()
        return self._current

    def matches(self, claimed: Any) -> bool:
        if not isinstance(claimed, str) or not claimed:
            return False
        return hmac.compare_digest(claimed.encode("utf-8"), self._current.encode("utf-8"))
