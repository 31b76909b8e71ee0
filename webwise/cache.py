"""Process-lifetime cache of feature ids known to be non-baseline."""

from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
import threading

from .classify import bulk_classify_all
from .constants import FALLBACK_NON_BASELINE_IDS
from .dataset import FeatureDataset
from .exceptions import WebwiseError
from .model import CacheSnapshot, ClassificationResult, FeatureSummary

LOGGER = logging.getLogger(__name__)

BulkSource = Callable[[], Iterable[ClassificationResult | FeatureSummary]]


def _result_id(result: ClassificationResult | FeatureSummary) -> str:
    if isinstance(result, FeatureSummary):
        return result.id
    return result.feature_id


class NonBaselineCache:
    """Set of non-baseline feature ids, published as immutable snapshots.

    ``warm`` and ``refresh`` build a complete new snapshot before swapping it
    in, so readers see either the previous set or the new one. Ids the bulk
    pass never saw are reported as not contained.
    """

    def __init__(
        self,
        source: BulkSource,
        *,
        fallback_ids: Iterable[str] = FALLBACK_NON_BASELINE_IDS,
    ) -> None:
        self._source = source
        self._fallback_ids = frozenset(fallback_ids)
        self._lock = threading.Lock()
        self._started = 0
        self._snapshot = CacheSnapshot()

    @classmethod
    def for_dataset(cls, dataset: FeatureDataset) -> NonBaselineCache:
        return cls(lambda: bulk_classify_all(dataset))

    @classmethod
    def from_loader(cls, loader: Callable[[], FeatureDataset]) -> NonBaselineCache:
        """Load the dataset lazily on each warm; load failures use the fallback list."""
        return cls(lambda: bulk_classify_all(loader()))

    def _build(self, generation: int) -> CacheSnapshot:
        try:
            results = list(self._source())
        except WebwiseError as exc:
            LOGGER.warning("Baseline data unavailable, using fallback list: %s", exc)
            return CacheSnapshot(
                feature_ids=self._fallback_ids,
                ready=True,
                source="fallback",
                generation=generation,
            )

        feature_ids = frozenset(_result_id(result) for result in results if not result.is_baseline)
        return CacheSnapshot(
            feature_ids=feature_ids,
            ready=True,
            source="dataset",
            generation=generation,
        )

    def _publish(self, snapshot: CacheSnapshot) -> bool:
        with self._lock:
            if snapshot.generation < self._snapshot.generation:
                LOGGER.debug(
                    "Discarding cache build %d, %d already published",
                    snapshot.generation,
                    self._snapshot.generation,
                )
                return False
            self._snapshot = snapshot
        LOGGER.info(
            "Loaded %d non-baseline features from %s", len(snapshot.feature_ids), snapshot.source
        )
        return True

    def warm(self) -> CacheSnapshot:
        with self._lock:
            self._started += 1
            generation = self._started
        self._publish(self._build(generation))
        return self._snapshot

    def refresh(self) -> CacheSnapshot:
        LOGGER.info("Refreshing baseline data")
        return self.warm()

    def refresh_in_background(
        self, on_done: Callable[[CacheSnapshot], None] | None = None
    ) -> threading.Thread:
        """Run ``refresh`` on a daemon thread; scans keep using the current snapshot."""

        def _run() -> None:
            snapshot = self.refresh()
            if on_done is not None:
                on_done(snapshot)

        thread = threading.Thread(target=_run, name="webwise-cache-refresh", daemon=True)
        thread.start()
        return thread

    def snapshot(self) -> CacheSnapshot:
        return self._snapshot

    def contains(self, feature_id: str) -> bool:
        return feature_id in self._snapshot.feature_ids

    def is_ready(self) -> bool:
        return self._snapshot.ready

    @property
    def source(self) -> str | None:
        return self._snapshot.source

    def __contains__(self, feature_id: object) -> bool:
        return isinstance(feature_id, str) and self.contains(feature_id)

    def __len__(self) -> int:
        return len(self._snapshot.feature_ids)
