"""
Revocation registry.

Tokens revoked at logout stay in here until their own expiry has passed.
Membership overrides an otherwise valid signature and expiry.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime

from lorekeep.core.utils import utc_now

logger = logging.getLogger(__name__)

# Prune lazily once this many revocations have been recorded since the last pass
PRUNE_EVERY = 256


class RevocationRegistry:
    """Process-wide set of revoked raw token strings."""
    
    def __init__(self, prune_every: int = PRUNE_EVERY):
        self._revoked: dict[str, datetime | None] = {}
        self._lock = threading.Lock()
        self._prune_every = prune_every
        self._since_prune = 0
    
    def revoke(self, token: str, expires_at: datetime | None = None) -> None:
        """
        Mark a token as revoked. Revoking twice is a no-op.
        
        expires_at lets the entry be pruned later; None keeps it forever.
        """
        with self._lock:
            if token in self._revoked:
                return
            self._revoked[token] = expires_at
            self._since_prune += 1
            due = self._since_prune >= self._prune_every
        if due:
            self.prune()
    
    def is_revoked(self, token: str) -> bool:
        with self._lock:
            return token in self._revoked
    
    def prune(self, now: datetime | None = None) -> int:
        """Drop entries whose token has expired anyway. Returns how many."""
        now = now or utc_now()
        with self._lock:
            expired = [
                token for token, exp in self._revoked.items()
                if exp is not None and exp <= now
            ]
            for token in expired:
                del self._revoked[token]
            self._since_prune = 0
        if expired:
            logger.debug(f"Pruned {len(expired)} expired revocations")
        return len(expired)
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._revoked)
