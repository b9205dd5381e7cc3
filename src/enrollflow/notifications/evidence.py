"""Evidence store - turns payment evidence references into viewable URLs."""

from __future__ import annotations

from typing import Protocol
from urllib.parse import quote


class EvidenceStore(Protocol):
    """Interface for the object store holding payment screenshots."""

    def resolve(self, reference: str) -> str:
        """Return a URL an admin can open for the reference."""
        ...


class StaticEvidenceStore:
    """Resolves references against a fixed public base URL.

    References that already are absolute URLs pass through untouched.
    """

    def __init__(self, base_url: str = "") -> None:
        self.base_url = base_url.rstrip("/")

    def resolve(self, reference: str) -> str:
        if reference.startswith(("http://", "https://")):
            return reference
        key = quote(reference.lstrip("/"))
        if not self.base_url:
            return key
        return f"{self.base_url}/{key}"
