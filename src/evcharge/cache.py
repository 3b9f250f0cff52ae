"""Per-session cache of station detail records."""

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from .models import Station

logger = logging.getLogger(__name__)


class Claim:
    """The right to fetch one station id, valid until committed, released or superseded."""

    def __init__(self, station_id: str):
        self.station_id = station_id
        self.done = threading.Event()  # set when the claim ends, for waiting callers


class StationCache:
    """
    Caches station details by id, at most one winning value per id.

    A value, once stored, is never replaced while it is fresh: a late put()
    for the same id returns the value already held. Fetching goes through a
    claim so that only one caller at a time loads a given id from the backend:

        station = cache.get_or_fetch(station_id, client.fetch_station)

    or, for callers driving the fetch themselves:

        claim = cache.claim(station_id)
        if claim:
            try:
                station = cache.commit(claim, client.fetch_station(station_id))
            except Exception:
                cache.release(claim)
                raise

    clear() and invalidate() supersede claims in flight. A superseded claim
    cannot store its result, so a fetch started before logout never lands in
    the cache afterwards.

    Entries never expire unless ttl_seconds is set; station metadata is then
    treated as immutable for the lifetime of the cache.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Age after which an entry is considered stale. None disables expiry.
            max_entries: Upper bound on stored entries; the oldest is evicted first. None for unbounded.
            clock: Time source, monotonic seconds.
        """
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        if max_entries is not None and max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, Tuple[Station, float]] = {}  # id -> (station, stored_at)
        self._claims: Dict[str, Claim] = {}  # id -> claim currently allowed to commit
        self._lock = threading.Lock()

    def _fresh(self, station_id: str, now: float) -> Optional[Station]:
        """Return the stored station if still fresh, dropping it otherwise. Lock must be held."""
        entry = self._entries.get(station_id)
        if entry is None:
            return None
        station, stored_at = entry
        if self.ttl_seconds is not None and now - stored_at >= self.ttl_seconds:
            del self._entries[station_id]
            logger.debug(f"Station {station_id} expired from cache")
            return None
        return station

    def get(self, station_id: str) -> Optional[Station]:
        """Return the cached station, or None if absent or stale."""
        with self._lock:
            station = self._fresh(station_id, self._clock())
        if station is None:
            logger.debug(f"Cache miss for station {station_id}")
        return station

    def has(self, station_id: str) -> bool:
        with self._lock:
            return self._fresh(station_id, self._clock()) is not None

    def put(self, station_id: str, station: Station) -> Station:
        """
        Store a station unless a fresh value is already cached.

        Ends any outstanding claim on station_id; that claim can no longer commit.

        Returns:
            The value held by the cache after the call, which is the earlier
            winner if there was one.
        """
        with self._lock:
            winner = self._store(station_id, station)
            self._end_claim(station_id)
        return winner

    def claim(self, station_id: str) -> Optional[Claim]:
        """
        Try to become the single fetcher for station_id.

        Returns:
            A Claim the caller must finish with commit() or release(). None if
            the station is cached or another caller is already fetching it.
        """
        with self._lock:
            if self._fresh(station_id, self._clock()) is not None:
                return None
            if station_id in self._claims:
                return None
            return self._new_claim(station_id)

    def commit(self, claim: Claim, station: Station) -> Station:
        """
        Store the result of a claimed fetch.

        If the claim was superseded by clear(), invalidate() or put(), nothing
        is stored; the cached value is returned if there is one, otherwise the
        fetched station is handed back to the caller uncached.
        """
        with self._lock:
            if self._claims.get(claim.station_id) is not claim:
                existing = self._fresh(claim.station_id, self._clock())
                logger.debug(f"Dropping superseded fetch of station {claim.station_id}")
                claim.done.set()
                return existing if existing is not None else station
            winner = self._store(claim.station_id, station)
            self._end_claim(claim.station_id)
        return winner

    def release(self, claim: Claim) -> None:
        """Give up a claim without storing anything, e.g. after a failed fetch."""
        with self._lock:
            if self._claims.get(claim.station_id) is claim:
                self._end_claim(claim.station_id)
            else:
                claim.done.set()

    def get_or_fetch(self, station_id: str, fetch: Callable[[str], Station]) -> Station:
        """
        Return the cached station, fetching it if needed.

        Concurrent callers for the same id wait for the one holding the claim.
        If that fetch fails, its caller gets the exception and a waiting caller
        takes over the claim. If the claim is superseded while fetching, waiting
        callers fetch again and the stale result is not cached.

        Args:
            station_id: Station to look up.
            fetch: Loads a station from the backend given its id.

        Returns:
            The cached or freshly fetched Station.
        """
        while True:
            with self._lock:
                station = self._fresh(station_id, self._clock())
                if station is not None:
                    logger.debug(f"Cache hit for station {station_id}")
                    return station
                pending = self._claims.get(station_id)
                if pending is None:
                    claim = self._new_claim(station_id)
                    break

            logger.debug(f"Waiting for in-flight fetch of station {station_id}")
            pending.done.wait()

        logger.debug(f"Fetching station {station_id}")
        try:
            station = fetch(station_id)
        except Exception:
            self.release(claim)
            raise
        return self.commit(claim, station)

    def invalidate(self, station_id: str) -> None:
        """Drop a cached station and any fetch of it in flight, so the next lookup refetches."""
        with self._lock:
            self._entries.pop(station_id, None)
            self._end_claim(station_id)

    def clear(self) -> None:
        """Drop all entries and supersede every claim in flight."""
        with self._lock:
            self._entries.clear()
            for station_id in list(self._claims):
                self._end_claim(station_id)
        logger.debug("Cleared station cache")

    def _new_claim(self, station_id: str) -> Claim:
        claim = Claim(station_id)
        self._claims[station_id] = claim
        return claim

    def _store(self, station_id: str, station: Station) -> Station:
        """First-write-wins store. Lock must be held."""
        now = self._clock()
        existing = self._fresh(station_id, now)
        if existing is not None:
            logger.debug(f"Station {station_id} already cached, keeping first value")
            return existing
        self._evict_oldest_if_full()
        self._entries[station_id] = (station, now)
        return station

    def _evict_oldest_if_full(self) -> None:
        if self.max_entries is None or len(self._entries) < self.max_entries:
            return
        oldest_id = min(self._entries, key=lambda k: self._entries[k][1])
        del self._entries[oldest_id]
        logger.debug(f"Evicted station {oldest_id} from full cache")

    def _end_claim(self, station_id: str) -> None:
        claim = self._claims.pop(station_id, None)
        if claim is not None:
            claim.done.set()

    def __contains__(self, station_id: str) -> bool:
        return self.has(station_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
