"""Claim tracking for files that are currently being processed."""

from __future__ import annotations

import threading
from typing import Iterator


class ClaimSet:
    """
    Thread-safe set of in-flight file identifiers.

    A duplicate event for an identifier already in the set must be ignored.
    ``try_claim`` is the only way in and ``release`` the only way out; the
    check-and-insert happens under one lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._claimed: set[str] = set()

    def try_claim(self, identifier: str) -> bool:
        """Claim ``identifier``; False if another task already owns it."""
        with self._lock:
            if identifier in self._claimed:
                return False
            self._claimed.add(identifier)
            return True

    def release(self, identifier: str) -> None:
        """Drop the claim on ``identifier`` (no-op if unclaimed)."""
        with self._lock:
            self._claimed.discard(identifier)

    def snapshot(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._claimed)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._claimed

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())
