from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, List, Optional

from geo_browser.core.csv_parser import parse_csv
from geo_browser.core.dataset import Dataset
from geo_browser.core.exceptions import DatasetSourceError
from geo_browser.services.sources import DatasetSource

logger = logging.getLogger(__name__)


class DatasetFetcher:
    """
    Asynchronous fetch + parse of datasets, keyed by name.

    At most one fetch per name is outstanding: asking again while a fetch is
    in flight returns the same Future. Fetches never fail their Future;
    source errors degrade to an empty Dataset so a selection stays usable
    and can be retried.
    """

    def __init__(
        self,
        source: DatasetSource,
        max_workers: int = 4,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._source = source
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dataset-fetch")
        self._in_flight: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def fetch(self, name: str) -> Future:
        with self._lock:
            future = self._in_flight.get(name)
            # A finished future may still be registered until its release callback runs
            if future is not None and not future.done():
                logger.debug("Fetch already in flight", extra={"dataset": name})
                return future

            logger.info("Fetching dataset", extra={"dataset": name})
            future = self._executor.submit(self._load, name)
            self._in_flight[name] = future

        future.add_done_callback(lambda f, n=name: self._release(n, f))
        return future

    def _release(self, name: str, future: Future) -> None:
        with self._lock:
            if self._in_flight.get(name) is future:
                del self._in_flight[name]

    def _load(self, name: str) -> Dataset:
        try:
            text = self._source.fetch_text(name)
            dataset = parse_csv(text, name=name, source=name)
        except DatasetSourceError as e:
            logger.error("Dataset fetch failed", extra={"dataset": name, "error": str(e)})
            return Dataset.empty(name)
        except Exception:
            logger.exception("Unexpected error while loading dataset", extra={"dataset": name})
            return Dataset.empty(name)

        logger.info("Fetched dataset", extra={"dataset": name, "rows": len(dataset)})
        return dataset

    def is_in_flight(self, name: str) -> bool:
        with self._lock:
            future = self._in_flight.get(name)
            return future is not None and not future.done()

    def in_flight_names(self) -> List[str]:
        with self._lock:
            return list(self._in_flight)

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until every fetch submitted so far has completed."""
        with self._lock:
            futures = list(self._in_flight.values())
        if futures:
            wait(futures, timeout=timeout)

    def shutdown(self, wait_for_pending: bool = True) -> None:
        self._executor.shutdown(wait=wait_for_pending)


def list_datasets(source: DatasetSource) -> List[str]:
    """Dataset listing that degrades to an empty list when the source is unavailable."""
    try:
        names = source.list_datasets()
    except DatasetSourceError as e:
        logger.error("Dataset listing failed", extra={"error": str(e)})
        return []
    logger.info("Listed datasets", extra={"n_datasets": len(names)})
    return names
