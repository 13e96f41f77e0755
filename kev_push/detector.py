"""Update detection: compare the cached catalog against the live one."""

import logging
from enum import Enum

from kev_push.cache.snapshot_store import SnapshotStore
from kev_push.feeds.cisa_kev import CatalogFetcher
from kev_push.notify import Notifier

logger = logging.getLogger(__name__)


class CacheState(Enum):
    NO_CACHE = "no-cache"
    CACHED = "cached"


class RunOutcome(Enum):
    BASELINE = "baseline"
    UNCHANGED = "unchanged"
    UPDATED = "updated"


class UpdateDetector:
    """Runs one check.

    Errors from loading, fetching or saving propagate to the caller: a
    corrupt snapshot is never treated as a missing one, and the notifier is
    only reached after the new snapshot has been written.
    """

    def __init__(self, store: SnapshotStore, fetcher: CatalogFetcher, notifier: Notifier):
        self.store = store
        self.fetcher = fetcher
        self.notifier = notifier

    def state(self) -> CacheState:
        return CacheState.CACHED if self.store.exists() else CacheState.NO_CACHE

    def run(self) -> RunOutcome:
        if self.state() is CacheState.NO_CACHE:
            logger.info("No snapshot at %s; recording baseline", self.store.path)
            doc = self.fetcher.fetch()
            self.store.save(doc)
            logger.info("Baseline saved (released %s)", doc.release_date)
            return RunOutcome.BASELINE

        cached = self.store.load()
        current = self.fetcher.fetch()
        logger.debug("Cached release %r, remote release %r",
                     cached.release_date, current.release_date)

        if cached.release_date == current.release_date:
            logger.info("KEV catalog unchanged since %s", cached.release_date)
            return RunOutcome.UNCHANGED

        self.store.save(current)
        logger.info("KEV catalog updated: %s -> %s",
                    cached.release_date, current.release_date)
        self.notifier.notify(current)
        return RunOutcome.UPDATED
