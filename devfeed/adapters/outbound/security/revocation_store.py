# devfeed/adapters/outbound/security/revocation_store.py

"""
In-memory list of revoked bearer tokens.

A token is stored with its own expiry instant. Lookups ignore that expiry:
only ``purge`` removes entries, and only those whose expiry has passed, so a
revoked token can never become valid again before it would have expired
anyway. The map lives in process memory and is lost on restart.
"""

import asyncio
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict

logger = logging.getLogger(__name__)

CLEANUP_PERIOD = timedelta(hours=1)


class RevocationStore:
    """Thread-safe ``token -> exp`` map shared by the event loop and worker threads."""

    def __init__(self):
        self._entries: Dict[str, datetime] = {}
        self._lock = threading.Lock()

    def revoke(self, token: str, expires_at: datetime) -> None:
        """Mark a token as revoked. Re-revoking keeps the latest expiry."""
        if not token or not token.strip():
            logger.warning("Attempt to revoke an empty token ignored")
            return

        with self._lock:
            current = self._entries.get(token)
            if current is None or expires_at > current:
                self._entries[token] = expires_at
            size = len(self._entries)

        logger.info(f"Token revoked, {size} entries in revocation list")

    def is_revoked(self, token: str) -> bool:
        if not token or not token.strip():
            return False
        with self._lock:
            return token in self._entries

    def purge(self, now: datetime) -> int:
        """
        Drop every entry whose expiry is strictly before ``now``.

        Returns:
            Number of entries removed
        """
        with self._lock:
            expired = [token for token, exp in self._entries.items() if exp < now]
            for token in expired:
                del self._entries[token]
            remaining = len(self._entries)

        if expired:
            logger.info(f"Purged {len(expired)} expired revoked tokens, {remaining} remaining")
        else:
            logger.debug(f"No expired revoked tokens to purge, {remaining} remaining")
        return len(expired)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)


async def periodic_revocation_purge(store: RevocationStore, period: timedelta = CLEANUP_PERIOD):
    """
    Purge the store every ``period`` until cancelled.

    Runs as a single task owned by the application lifespan.
    """
    interval = period.total_seconds()
    while True:
        try:
            await asyncio.sleep(interval)
            store.purge(datetime.now(timezone.utc))
        except asyncio.CancelledError:
            logger.info("Revocation purge task cancelled")
            raise
        except Exception as e:
            logger.exception(f"Error purging revocation list: {e}")
