from __future__ import annotations

__all__ = ["IDs", "filter_control_id"]


class IDs:
    class Store:
        STATE_VERSION = "state-version"
        FILTER_TICK = "filter-tick"

    class Control:
        # Dataset panel
        DATASET_CHECKLIST = "dataset-checklist"
        HEATMAP_CHECKLIST = "heatmap-checklist"
        MAP_OPTIONS = "map-options"
        RESET_FILTERS_BTN = "reset-filters-btn"
        DATASET_STATUS = "dataset-status"

        # Filter panel
        FILTER_CONTAINER = "filter-container"

        # Plot panel
        MAP_GRAPH = "map-graph"
        FOCUS_SELECT = "focus-select"
        CHART_KINDS = "chart-kinds"
        CHART_CONTAINER = "chart-container"
        STATS_CONTAINER = "stats-container"
        FILTER_STATUS = "filter-status"

        # Downloads
        DOWNLOAD_DATA = "download-data"
        DOWNLOAD_DATA_BTN = "download-data-btn"

        # Polls while dataset fetches are in flight
        FETCH_POLL = "fetch-poll"

    class Pattern:
        # pattern-matching "type" strings; "index" is the dataset name
        FILTER_FLAGS = "filter-flags"
        FILTER_RANGE = "filter-range"
        FILTER_MIN = "filter-min"
        FILTER_MAX = "filter-max"


def filter_control_id(control_type: str, dataset_name: str) -> dict:
    return {"type": control_type, "index": dataset_name}
