from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from geo_browser.core.exceptions import DatasetFetchError, DatasetSourceError

logger = logging.getLogger(__name__)

DATASET_SUFFIX = ".csv"


class DatasetSource(ABC):
    """
    Abstract interface for where datasets come from (local directory, HTTP server).

    Identifiers are opaque strings; the listing order is the display order.
    """

    @abstractmethod
    def list_datasets(self) -> List[str]:
        pass

    @abstractmethod
    def fetch_text(self, name: str) -> str:
        """Return the delimited text of one dataset. Raises DatasetFetchError."""
        pass


class LocalDirectorySource(DatasetSource):
    """
    Serves the *.csv files of one directory.
    """

    def __init__(self, root: Path, suffix: str = DATASET_SUFFIX):
        self.root = Path(root).resolve()
        self.suffix = suffix

    def _resolve(self, name: str) -> Path:
        # Prevent path traversal outside the data root
        full_path = (self.root / name).resolve()
        if not full_path.is_relative_to(self.root):
            raise DatasetFetchError(name, "access denied")
        return full_path

    def list_datasets(self) -> List[str]:
        if not self.root.is_dir():
            raise DatasetSourceError(f"Data directory not found at: {self.root}")
        return sorted(
            f.name
            for f in self.root.glob(f"*{self.suffix}")
            if f.is_file() and not f.name.startswith("._")
        )

    def fetch_text(self, name: str) -> str:
        path = self._resolve(name)
        if not path.is_file():
            raise DatasetFetchError(name, f"file not found at {path}")
        try:
            return path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise DatasetFetchError(name, str(e)) from e


def make_session(
    max_retries: int = 3,
    backoff_factor: float = 0.5,
    status_forcelist: tuple = (429, 500, 502, 503, 504),
) -> requests.Session:
    """requests.Session with automatic retry and backoff for GETs."""
    session = requests.Session()
    retry = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=list(status_forcelist),
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class HttpDatasetSource(DatasetSource):
    """
    Talks to a dataset server exposing:

    - GET {base_url}/api/csv-files -> {"success": true, "files": [...]}
    - GET {base_url}/data/{name}   -> CSV text
    """

    LIST_PATH = "/api/csv-files"
    DATA_PATH = "/data/"

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or make_session()

    def list_datasets(self) -> List[str]:
        url = f"{self.base_url}{self.LIST_PATH}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise DatasetSourceError(f"Dataset listing failed at {url}: {e}") from e

        if not isinstance(payload, dict) or not payload.get("success") or not isinstance(payload.get("files"), list):
            raise DatasetSourceError(f"Invalid listing response from {url}: {payload!r}")
        return [str(f) for f in payload["files"]]

    def fetch_text(self, name: str) -> str:
        url = f"{self.base_url}{self.DATA_PATH}{quote(name)}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise DatasetFetchError(name, str(e)) from e
        if not resp.ok:
            raise DatasetFetchError(name, f"HTTP error! status: {resp.status_code}")
        return resp.text
