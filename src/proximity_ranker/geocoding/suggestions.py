"""
Debounced address suggestions where the newest request always wins.

Each request gets a sequence number when it is issued. When a lookup
completes, its results are delivered only if no newer request has been
issued in the meantime; stale completions are dropped, not cancelled.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from .base import Geocoder
from .models import SuggestionItem

logger = logging.getLogger(__name__)

SuggestionCallback = Callable[[List[SuggestionItem]], None]


class SuggestionFeed:
    """
    Tracks suggestion request order for one input box.

    ``request()`` debounces with a threading.Timer and delivers through a
    callback; ``fetch()`` runs synchronously and returns None when the
    result went stale while the lookup was in flight.
    """

    def __init__(self, geocoder: Geocoder, debounce_s: float = 0.35):
        self.geocoder = geocoder
        self.debounce_s = debounce_s
        self._seq = 0
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    @property
    def latest(self) -> int:
        return self._seq

    def issue(self) -> int:
        """Register a new request and return its sequence number."""
        with self._lock:
            self._seq += 1
            return self._seq

    def is_current(self, seq: int) -> bool:
        with self._lock:
            return seq == self._seq

    def complete(self, seq: int, items: List[SuggestionItem]) -> Optional[List[SuggestionItem]]:
        """Return ``items`` if ``seq`` is still the newest request, else None."""
        if not self.is_current(seq):
            logger.debug(f"Dropping stale suggestions #{seq} (latest #{self._seq})")
            return None
        return items

    def fetch(self, query: str) -> Optional[List[SuggestionItem]]:
        """Look up suggestions now. Returns None if superseded before completion."""
        seq = self.issue()
        if not query or not query.strip():
            return self.complete(seq, [])
        return self.complete(seq, self.geocoder.lookup_suggestions(query))

    def request(self, query: str, callback: SuggestionCallback) -> int:
        """
        Schedule a lookup after the debounce delay.

        A pending timer from an earlier request is cancelled; an earlier
        lookup that already started still runs but its results are dropped.
        """
        seq = self.issue()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce_s, self._deliver, args=(seq, query, callback))
            self._timer.daemon = True
            self._timer.start()
        return seq

    def _deliver(self, seq: int, query: str, callback: SuggestionCallback) -> None:
        if not self.is_current(seq):
            return
        items = self.geocoder.lookup_suggestions(query) if query and query.strip() else []
        accepted = self.complete(seq, items)
        if accepted is not None:
            callback(accepted)

    def cancel_pending(self) -> None:
        """Cancel any scheduled lookup and invalidate in-flight ones."""
        self.issue()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
