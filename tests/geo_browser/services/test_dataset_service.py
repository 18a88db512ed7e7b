from __future__ import annotations

import threading
from typing import Dict, List

from geo_browser.core.exceptions import DatasetFetchError, DatasetSourceError
from geo_browser.services.dataset_service import DatasetFetcher, list_datasets
from geo_browser.services.sources import DatasetSource


class GatedSource(DatasetSource):
    """In-memory source whose fetches block until `gate` is set."""

    def __init__(self, texts: Dict[str, str]):
        self.texts = texts
        self.gate = threading.Event()
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def list_datasets(self) -> List[str]:
        return sorted(self.texts)

    def fetch_text(self, name: str) -> str:
        with self._lock:
            self.calls.append(name)
        self.gate.wait(timeout=5)
        if name not in self.texts:
            raise DatasetFetchError(name, "not found")
        return self.texts[name]


class BrokenSource(DatasetSource):
    def list_datasets(self) -> List[str]:
        raise DatasetSourceError("listing unavailable")

    def fetch_text(self, name: str) -> str:
        raise RuntimeError("unexpected")


def test_fetch_is_deduplicated_while_in_flight():
    source = GatedSource({"a.csv": "lat,lng,score\n1,2,3\n4,5,6"})
    fetcher = DatasetFetcher(source, max_workers=2)
    try:
        first = fetcher.fetch("a.csv")
        second = fetcher.fetch("a.csv")

        assert first is second
        assert fetcher.is_in_flight("a.csv")

        source.gate.set()
        dataset = first.result(timeout=5)
    finally:
        fetcher.shutdown()

    assert source.calls == ["a.csv"]
    assert dataset.name == "a.csv"
    assert len(dataset) == 2


def test_distinct_names_fetch_concurrently():
    source = GatedSource({"a.csv": "lat,lng,score\n1,2,3", "b.csv": "lat,lng,score\n1,2,yes"})
    fetcher = DatasetFetcher(source, max_workers=2)
    try:
        fa, fb = fetcher.fetch("a.csv"), fetcher.fetch("b.csv")
        assert fa is not fb
        source.gate.set()
        assert len(fa.result(timeout=5)) == 1
        assert len(fb.result(timeout=5)) == 1
    finally:
        fetcher.shutdown()


def test_fetch_failure_degrades_to_empty_dataset():
    source = GatedSource({})
    source.gate.set()
    fetcher = DatasetFetcher(source, max_workers=1)
    try:
        dataset = fetcher.fetch("missing.csv").result(timeout=5)
    finally:
        fetcher.shutdown()

    assert dataset.name == "missing.csv"
    assert dataset.is_empty
    assert dataset.descriptor is None


def test_unexpected_error_degrades_to_empty_dataset():
    fetcher = DatasetFetcher(BrokenSource(), max_workers=1)
    try:
        assert fetcher.fetch("a.csv").result(timeout=5).is_empty
    finally:
        fetcher.shutdown()


def test_refetch_after_completion_issues_new_request():
    source = GatedSource({"a.csv": "lat,lng,score\n1,2,3"})
    source.gate.set()
    fetcher = DatasetFetcher(source, max_workers=1)
    try:
        fetcher.fetch("a.csv").result(timeout=5)
        fetcher.wait(timeout=5)
        fetcher.fetch("a.csv").result(timeout=5)
    finally:
        fetcher.shutdown()

    assert source.calls == ["a.csv", "a.csv"]


def test_list_datasets_degrades_to_empty():
    assert list_datasets(BrokenSource()) == []
    assert list_datasets(GatedSource({"b.csv": "", "a.csv": ""})) == ["a.csv", "b.csv"]
