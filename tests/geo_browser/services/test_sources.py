from __future__ import annotations

from typing import Dict, List

import pytest
import requests

from geo_browser.core.exceptions import DatasetFetchError, DatasetSourceError
from geo_browser.services.sources import HttpDatasetSource, LocalDirectorySource


# -----------------------------------------------------------------------------
# Local directory
# -----------------------------------------------------------------------------
def test_local_source_lists_csv_files_sorted(tmp_path):
    for name in ["b.csv", "a.csv", "notes.txt", "._a.csv"]:
        (tmp_path / name).write_text("lat,lng,score\n")
    (tmp_path / "dir.csv").mkdir()

    source = LocalDirectorySource(tmp_path)

    assert source.list_datasets() == ["a.csv", "b.csv"]


def test_local_source_reads_text_without_bom(tmp_path):
    (tmp_path / "a.csv").write_text("\ufefflat,lng,score\n1,2,3", encoding="utf-8")

    assert LocalDirectorySource(tmp_path).fetch_text("a.csv") == "lat,lng,score\n1,2,3"


def test_local_source_missing_file(tmp_path):
    with pytest.raises(DatasetFetchError, match="missing.csv"):
        LocalDirectorySource(tmp_path).fetch_text("missing.csv")


def test_local_source_rejects_path_traversal(tmp_path):
    root = tmp_path / "data"
    root.mkdir()
    (tmp_path / "secret.csv").write_text("x")

    with pytest.raises(DatasetFetchError, match="access denied"):
        LocalDirectorySource(root).fetch_text("../secret.csv")


def test_local_source_rejects_sibling_with_root_prefix(tmp_path):
    root = tmp_path / "data"
    root.mkdir()
    sibling = tmp_path / "data_secret"
    sibling.mkdir()
    (sibling / "secret.csv").write_text("lat,lng,score\n1,1,5\n")

    with pytest.raises(DatasetFetchError, match="access denied"):
        LocalDirectorySource(root).fetch_text("../data_secret/secret.csv")


def test_local_source_missing_directory(tmp_path):
    with pytest.raises(DatasetSourceError):
        LocalDirectorySource(tmp_path / "nope").list_datasets()


# -----------------------------------------------------------------------------
# HTTP (stubbed session)
# -----------------------------------------------------------------------------
class StubResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


class StubSession:
    def __init__(self, responses: Dict[str, object]):
        self.responses = responses
        self.urls: List[str] = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


BASE = "http://datasets.local"


def test_http_listing():
    session = StubSession({f"{BASE}/api/csv-files": StubResponse(payload={"success": True, "files": ["a.csv", "b.csv"]})})

    source = HttpDatasetSource(BASE + "/", session=session)

    assert source.list_datasets() == ["a.csv", "b.csv"]
    assert session.urls == [f"{BASE}/api/csv-files"]


@pytest.mark.parametrize(
    "response",
    [
        StubResponse(payload={"success": False, "error": "boom"}),
        StubResponse(payload={"success": True}),
        StubResponse(payload=["a.csv"]),
        StubResponse(text="not json"),
        StubResponse(status_code=500, payload={}),
    ],
)
def test_http_listing_errors(response):
    source = HttpDatasetSource(BASE, session=StubSession({f"{BASE}/api/csv-files": response}))
    with pytest.raises(DatasetSourceError):
        source.list_datasets()


def test_http_fetch_quotes_name():
    url = f"{BASE}/data/tree%20survey.csv"
    session = StubSession({url: StubResponse(text="lat,lng,score\n1,2,yes")})

    text = HttpDatasetSource(BASE, session=session).fetch_text("tree survey.csv")

    assert text == "lat,lng,score\n1,2,yes"


def test_http_fetch_non_ok_response():
    session = StubSession({f"{BASE}/data/a.csv": StubResponse(status_code=404)})

    with pytest.raises(DatasetFetchError, match="HTTP error! status: 404"):
        HttpDatasetSource(BASE, session=session).fetch_text("a.csv")


def test_http_fetch_connection_error():
    session = StubSession({f"{BASE}/data/a.csv": requests.ConnectionError("refused")})

    with pytest.raises(DatasetFetchError) as excinfo:
        HttpDatasetSource(BASE, session=session).fetch_text("a.csv")

    assert excinfo.value.name == "a.csv"
