"""
Ranking session: the candidate set, the view state and the ranking pass.

A session is created at ingestion, cleared with ``reset()`` and replaced
wholesale with ``load()``. Only one ranking pass may run per session at a
time; the pass resolves candidates one by one through the cascade, pacing
after every resolution, and can be cancelled between candidates.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from ..geocoding.cascade import AddressResolver
from ..geocoding.base import RateLimiter
from ..geocoding.geocoders import NominatimClient
from ..geocoding.models import Coordinate, SuggestionItem
from ..geocoding.throttling import FixedDelayPacer
from ..settings import Settings, get_settings
from ..utils.errors import PassInProgressError
from .candidates import Candidate
from .distance import distance_between
from .engine import DEFAULT_SORT_MODE, SortMode, top_nearest, view

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class CancellationToken:
    """Cooperative cancellation flag checked before each candidate."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class RankingPassResult:
    candidates: List[Candidate]
    nearest: List[Candidate]
    processed: int
    total: int
    cancelled: bool = False
    failed: List[Candidate] = field(default_factory=list)


class RankingSession:
    """
    Holds one batch of candidates and ranks them against an origin.

    Usage:
        session = RankingSession(candidates)
        origin = session.resolve_origin(city="Springfield", state="IL")
        result = session.run_ranking_pass(origin, progress=print)
        rows = session.view()
    """

    def __init__(
        self,
        candidates: Iterable[Candidate] = (),
        resolver: Optional[AddressResolver] = None,
        pacer: Optional[RateLimiter] = None,
        settings: Optional[Settings] = None,
        name: str = "session",
    ):
        cfg = settings or get_settings()
        self.name = name
        self.top_k = cfg.top_k
        self.resolver = resolver or AddressResolver(NominatimClient(settings=cfg))
        self.pacer = pacer or FixedDelayPacer(cfg.geocode_delay_s)

        self.candidates: List[Candidate] = list(candidates)
        self.sort_mode: SortMode = DEFAULT_SORT_MODE
        self.filter_text: str = ""
        self.origin: Optional[Coordinate] = None

        self._pass_lock = threading.Lock()
        self._active_token: Optional[CancellationToken] = None

    # --- View state -----------------------------------------------------------
    def set_sort_mode(self, sort_mode: SortMode | str) -> None:
        self.sort_mode = SortMode.parse(sort_mode)

    def set_filter(self, filter_text: str) -> None:
        self.filter_text = filter_text or ""

    def view(self) -> List[Candidate]:
        return view(self.candidates, self.sort_mode, self.filter_text)

    def top_nearest(self, k: Optional[int] = None) -> List[Candidate]:
        return top_nearest(self.candidates, self.top_k if k is None else k)

    # --- Origin ---------------------------------------------------------------
    def resolve_origin(
        self,
        street: str = "",
        city: str = "",
        state: str = "",
        postal_code: str = "",
    ) -> Optional[Coordinate]:
        """Resolve and store the origin. Paces once if any lookup was attempted."""
        if not any(v and v.strip() for v in (street, city, state, postal_code)):
            return None

        coord = self.resolver.resolve_origin_address(street, city, state, postal_code)
        self.pacer.wait()
        self.origin = coord
        return coord

    def select_suggestion(self, item: SuggestionItem) -> Coordinate:
        """Use a picked suggestion as the origin without another lookup."""
        self.origin = item.coordinate
        logger.info(f"Origin set from suggestion: {item.label}")
        return self.origin

    # --- Ranking pass ---------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self._pass_lock.locked()

    def cancel(self) -> bool:
        """Signal the in-flight pass to stop. Returns False if none is running."""
        token = self._active_token
        if token is None:
            return False
        token.cancel()
        return True

    def run_ranking_pass(
        self,
        origin: Optional[Coordinate] = None,
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> RankingPassResult:
        """
        Resolve every candidate with an address and record its distance.

        Args:
            origin: Reference point (defaults to the session origin)
            progress: Called as (processed, total, label) after each candidate
            cancel: Token checked before each candidate starts

        Returns:
            RankingPassResult with the top-K nearest candidates

        Raises:
            PassInProgressError: another pass is running on this session
            ValueError: no origin was given or resolved beforehand
        """
        if not self._pass_lock.acquire(blocking=False):
            raise PassInProgressError(self.name)

        try:
            origin = origin or self.origin
            if origin is None:
                raise ValueError("No origin: resolve an address or pick a suggestion first")
            self.origin = origin

            token = cancel or CancellationToken()
            self._active_token = token

            queue = [c for c in self.candidates if not c.address.is_empty()]
            total = len(queue)
            processed = 0
            cancelled = False
            failed: List[Candidate] = []

            logger.info(f"Ranking pass started for {total} candidates")
            for candidate in queue:
                if token.cancelled:
                    cancelled = True
                    logger.info(f"Ranking pass cancelled after {processed} of {total}")
                    break

                coord = self.resolver.resolve_candidate_address(candidate.address)
                self.pacer.wait()

                if coord is None:
                    candidate.resolved_distance_miles = None
                    failed.append(candidate)
                else:
                    candidate.resolved_distance_miles = distance_between(origin, coord)

                processed += 1
                if progress is not None:
                    progress(processed, total, candidate.label)

            if not cancelled:
                self.sort_mode = SortMode.DISTANCE_ASC
                logger.info(
                    f"Ranking pass complete: {total - len(failed)} resolved, {len(failed)} unresolved"
                )

            return RankingPassResult(
                candidates=self.candidates,
                nearest=self.top_nearest(),
                processed=processed,
                total=total,
                cancelled=cancelled,
                failed=failed,
            )
        finally:
            self._active_token = None
            self._pass_lock.release()

    # --- Lifecycle ------------------------------------------------------------
    def reset(self) -> List[Candidate]:
        """Clear distances, origin, sort mode and filter."""
        if self.is_running:
            raise PassInProgressError(self.name)

        for candidate in self.candidates:
            candidate.resolved_distance_miles = None
        self.sort_mode = DEFAULT_SORT_MODE
        self.filter_text = ""
        self.origin = None
        return self.candidates

    def load(self, candidates: Iterable[Candidate]) -> None:
        """Replace the candidate set (e.g. after re-ingestion)."""
        if self.is_running:
            raise PassInProgressError(self.name)

        self.candidates = list(candidates)
        self.sort_mode = DEFAULT_SORT_MODE
        self.filter_text = ""
        self.origin = None
        logger.info(f"Loaded {len(self.candidates)} candidates into {self.name}")
