class GeoBrowserError(Exception):
    """Base exception for all geo_browser errors"""
    pass

class ConfigError(GeoBrowserError):
    """Invalid or inconsistent global.json or source configuration"""
    pass

class DatasetSourceError(GeoBrowserError):
    """
    A dataset source could not list or serve datasets
    (missing directory, unreachable listing endpoint, bad payload)
    """
    pass

class DatasetFetchError(DatasetSourceError):
    """Fetching the content of a single dataset failed (non-OK response, unreadable file)"""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Failed to fetch dataset '{name}': {reason}")
        self.name = name
        self.reason = reason
