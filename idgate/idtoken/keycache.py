"""
Public-key cache backed by a pluggable key-set fetcher.

Background for newcomers:
    Google signs every ID token with one of a handful of RSA keys and
    publishes the matching public keys (a JWKS document) together with a
    ``Cache-Control: max-age`` telling us how long they stay valid. The cache
    keeps the current set in memory and re-fetches it only once that deadline
    has passed, so verifying a token normally costs no network round trip.

Concurrency:
    The key set and its deadline live in one immutable ``KeyMaterial``
    snapshot held in a single attribute. Readers grab the reference once and
    never take a lock. A caller that finds the snapshot stale fetches and
    decodes *without* holding any lock (the fetch may be a slow network call),
    then takes ``_lock`` only to install the replacement. Several threads can
    end up refreshing at the same moment; each produces a complete snapshot
    and the last one installed wins.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import closing
from typing import BinaryIO, Callable

from .errors import KeyRefreshFailed
from .keyset import KeyMaterial, PublicKey, decode_key_set

logger = logging.getLogger(__name__)

KeyFetcher = Callable[[], tuple[BinaryIO, float]]
"""
Returns a readable JWKS byte stream and the epoch time after which it is
stale. Raises on failure. May be called from several threads at once.
"""


class KeyCache:
    """
    In-memory cache of RSA public keys indexed by key id.

    Construction performs one fetch so a bad key source (unreachable URL,
    malformed document) fails immediately rather than on the first token.
    """

    def __init__(self, fetcher: KeyFetcher, *, clock: Callable[[], float] = time.time) -> None:
        self._fetcher = fetcher
        self._clock = clock
        self._lock = threading.Lock()
        self._material: KeyMaterial | None = None
        self.resolve_key("")

    @property
    def expires_at(self) -> float:
        material = self._material
        return material.expires_at if material is not None else 0.0

    def key_ids(self) -> frozenset[str]:
        material = self._material
        return frozenset(material.keys) if material is not None else frozenset()

    def _refresh(self) -> KeyMaterial:
        """Fetch and decode a new key set, then install it. Previous state is kept on failure."""
        try:
            stream, expires_at = self._fetcher()
        except Exception as e:
            raise KeyRefreshFailed(f"fetch key set: {e}") from e

        try:
            with closing(stream):
                keys = decode_key_set(stream.read())
        except Exception as e:
            raise KeyRefreshFailed(f"update key cache: {e}") from e

        material = KeyMaterial(keys=keys, expires_at=float(expires_at))
        with self._lock:
            self._material = material
        logger.debug("Key cache refreshed keys=%d expires_at=%.0f", len(keys), material.expires_at)
        return material

    def resolve_key(self, kid: str) -> PublicKey | None:
        """
        Return the public key for ``kid``, or None if the current set lacks it.

        Refreshes first when the deadline has passed. A failed refresh raises
        ``KeyRefreshFailed`` and aborts the lookup; there is no fallback to
        the stale set.
        """
        material = self._material
        if material is None or self._clock() >= material.expires_at:
            material = self._refresh()
        return material.keys.get(kid)
