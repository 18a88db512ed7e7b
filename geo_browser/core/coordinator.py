"""
Multi-dataset coordination.

`DashboardState` is an immutable snapshot of everything the dashboard
shares: selection, loaded records, per-dataset selectors, heatmap
inclusion and focus. Module-level functions are pure transitions
(state in, state out). `Coordinator` owns the current snapshot, adopts
the results of those transitions and drives dataset fetches.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from geo_browser.core.dataset import Dataset
from geo_browser.core.filtering import COMBINED_NAME, apply_selector, filter_combined
from geo_browser.core.selector import Selector, default_selector

if TYPE_CHECKING:
    from geo_browser.services.dataset_service import DatasetFetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    """
    Snapshot of coordinator-owned state.

    Fields:

    - selected: selected dataset names, in selection order
    - records: loaded datasets by name (only names whose fetch has resolved)
    - selectors: filter state by name; kept across deselection
    - heatmap: names contributing to the density overlay, always within `selected`
    - focused: a single dataset for isolated stats/charts, None for the combined view
    - pending: names with a fetch in flight
    """

    selected: Tuple[str, ...] = ()
    records: Dict[str, Dataset] = field(default_factory=dict)
    selectors: Dict[str, Selector] = field(default_factory=dict)
    heatmap: Tuple[str, ...] = ()
    focused: Optional[str] = None
    pending: FrozenSet[str] = frozenset()

    def is_ready(self, name: str) -> bool:
        return name in self.selected and name in self.records

    def needs_fetch(self, name: str) -> bool:
        return name in self.selected and name not in self.records and name not in self.pending

    def selector_for(self, name: str) -> Optional[Selector]:
        return self.selectors.get(name)


# -----------------------------------------------------------------------------
# Selection
# -----------------------------------------------------------------------------
def select(state: DashboardState, name: str) -> DashboardState:
    if name in state.selected:
        return state
    selected = state.selected + (name,)
    # Empty -> non-empty selection: every selected dataset feeds the heatmap.
    heatmap = selected if not state.selected else state.heatmap
    return replace(state, selected=selected, heatmap=heatmap)


def deselect(state: DashboardState, name: str) -> DashboardState:
    """
    Drop a dataset from the selection.

    Its records are evicted immediately; its selector is kept so that
    re-selecting restores the previous filter values.
    """
    if name not in state.selected:
        return state
    records = {k: v for k, v in state.records.items() if k != name}
    return replace(
        state,
        selected=tuple(n for n in state.selected if n != name),
        records=records,
        heatmap=tuple(n for n in state.heatmap if n != name),
        focused=None if state.focused == name else state.focused,
        pending=state.pending - {name},
    )


def toggle(state: DashboardState, name: str) -> DashboardState:
    return deselect(state, name) if name in state.selected else select(state, name)


def set_selection(state: DashboardState, names: Iterable[str]) -> DashboardState:
    """Move to exactly `names`, applying deselects first and selects in the given order."""
    names = list(dict.fromkeys(names))
    for name in state.selected:
        if name not in names:
            state = deselect(state, name)
    started_empty = not state.selected
    for name in names:
        state = select(state, name)
    if started_empty and state.selected and state.heatmap != state.selected:
        state = replace(state, heatmap=state.selected)
    return state


# -----------------------------------------------------------------------------
# Fetch lifecycle
# -----------------------------------------------------------------------------
def mark_pending(state: DashboardState, name: str) -> DashboardState:
    if not state.needs_fetch(name):
        return state
    return replace(state, pending=state.pending | {name})


def apply_fetch_result(state: DashboardState, name: str, dataset: Dataset) -> DashboardState:
    """
    Adopt a resolved fetch.

    A result for a name that is no longer selected is stale and discarded:
    the same state object is returned.
    """
    if name not in state.selected:
        return state
    records = dict(state.records)
    records[name] = dataset
    state = replace(state, records=records, pending=state.pending - {name})
    return ensure_selectors(state)


# -----------------------------------------------------------------------------
# Selectors
# -----------------------------------------------------------------------------
def _kind_of(state: DashboardState, name: str):
    ds = state.records.get(name)
    descriptor = ds.descriptor if ds is not None else None
    return descriptor.score_kind if descriptor is not None else None


def ensure_selectors(state: DashboardState) -> DashboardState:
    """
    Give every loaded, supported, selected dataset a selector.

    Existing selectors are never replaced, so calling this on every render
    cannot reset a user-adjusted filter.
    """
    missing = [
        name
        for name in state.selected
        if name not in state.selectors
        and name in state.records
        and state.records[name].descriptor is not None
    ]
    if not missing:
        return state
    selectors = dict(state.selectors)
    for name in missing:
        selectors[name] = default_selector(_kind_of(state, name))
    return replace(state, selectors=selectors)


def update_selector(state: DashboardState, name: str, **changes: Any) -> DashboardState:
    """Change fields of one selector; invalid bounds are clamped, not rejected."""
    kind = _kind_of(state, name)
    current = state.selectors.get(name) or default_selector(kind)
    updated = replace(current, **changes).clamped(kind)
    if updated == state.selectors.get(name):
        return state
    selectors = dict(state.selectors)
    selectors[name] = updated
    return replace(state, selectors=selectors)


def reset_filters(state: DashboardState) -> DashboardState:
    """
    Back to defaults for every selected dataset.

    Selectors retained for deselected datasets are discarded.
    """
    selectors = {
        name: default_selector(_kind_of(state, name))
        for name in state.selected
        if name in state.records and state.records[name].descriptor is not None
    }
    return replace(state, selectors=selectors)


# -----------------------------------------------------------------------------
# Heatmap + focus
# -----------------------------------------------------------------------------
def set_heatmap_inclusion(state: DashboardState, name: str, included: bool) -> DashboardState:
    if name not in state.selected:
        return state
    if included and name not in state.heatmap:
        heatmap = tuple(n for n in state.selected if n in state.heatmap or n == name)
        return replace(state, heatmap=heatmap)
    if not included and name in state.heatmap:
        return replace(state, heatmap=tuple(n for n in state.heatmap if n != name))
    return state


def set_focus(state: DashboardState, name: Optional[str]) -> DashboardState:
    if name is not None and name not in state.selected:
        name = None
    if name == state.focused:
        return state
    return replace(state, focused=name)


# -----------------------------------------------------------------------------
# Derived views (pure)
# -----------------------------------------------------------------------------
def visible_datasets(state: DashboardState) -> Dict[str, Dataset]:
    """Selected and loaded datasets in selection order; pending ones are excluded."""
    return {name: state.records[name] for name in state.selected if name in state.records}


def describe_filters(state: DashboardState) -> Optional[str]:
    """
    Short filter status line for the statistics panel, or None when no
    filter is narrowing the current view.
    """
    def kind(name: str):
        return _kind_of(state, name)

    if state.focused is not None:
        selector = state.selectors.get(state.focused)
        if selector is None or not selector.is_active(kind(state.focused)):
            return None
        return ", ".join(selector.describe(kind(state.focused))) or None

    active = [
        name
        for name in state.selected
        if name in state.selectors and state.selectors[name].is_active(kind(name))
    ]
    if not active:
        return None
    return f"{len(active)} dataset(s) have active filters"


class Coordinator:
    """
    Owner of the shared dashboard state.

    All mutation goes through `dispatch`, which applies a pure transition
    and adopts its result under a lock. Selecting a dataset that is not
    loaded issues one fetch through the DatasetFetcher; results are adopted
    with the stale-response guard of `apply_fetch_result`.
    """

    def __init__(self, fetcher: DatasetFetcher, state: Optional[DashboardState] = None):
        self._fetcher = fetcher
        self._state = state or DashboardState()
        self._lock = threading.RLock()
        self._settled = threading.Condition(self._lock)
        self._version = 0
        self._watched: Dict[str, Future] = {}

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def version(self) -> int:
        """Incremented every time a transition changes the state."""
        return self._version

    def dispatch(self, action: Callable[..., DashboardState], *args: Any, **kwargs: Any) -> DashboardState:
        with self._lock:
            new_state = action(self._state, *args, **kwargs)
            if new_state is not self._state:
                self._state = new_state
                self._version += 1
            return self._state

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def select(self, name: str) -> DashboardState:
        self.dispatch(select, name)
        return self._request_missing()

    def deselect(self, name: str) -> DashboardState:
        return self.dispatch(deselect, name)

    def toggle(self, name: str) -> DashboardState:
        self.dispatch(toggle, name)
        return self._request_missing()

    def set_selection(self, names: Iterable[str]) -> DashboardState:
        self.dispatch(set_selection, list(names))
        return self._request_missing()

    def update_selector(self, name: str, **changes: Any) -> DashboardState:
        return self.dispatch(update_selector, name, **changes)

    def reset_filters(self) -> DashboardState:
        return self.dispatch(reset_filters)

    def set_heatmap_inclusion(self, name: str, included: bool) -> DashboardState:
        return self.dispatch(set_heatmap_inclusion, name, included)

    def set_focus(self, name: Optional[str]) -> DashboardState:
        return self.dispatch(set_focus, name)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    def _request_missing(self) -> DashboardState:
        with self._lock:
            to_fetch = [n for n in self._state.selected if self._state.needs_fetch(n)]
            for name in to_fetch:
                self.dispatch(mark_pending, name)

        for name in to_fetch:
            future = self._fetcher.fetch(name)
            with self._lock:
                # A reselect during an in-flight fetch gets the same future back
                if self._watched.get(name) is future:
                    continue
                self._watched[name] = future
            future.add_done_callback(lambda f, n=name: self._on_fetched(n, f))
        return self._state

    def _on_fetched(self, name: str, future: Future) -> None:
        with self._lock:
            if self._watched.get(name) is future:
                del self._watched[name]
        try:
            dataset = future.result()
        except Exception:
            # The fetcher degrades failures itself; this is a last resort.
            logger.exception("Dataset fetch raised", extra={"dataset": name})
            dataset = Dataset.empty(name)

        with self._lock:
            before = self._state
            after = self.dispatch(apply_fetch_result, name, dataset)
            self._settled.notify_all()
        if after is before:
            logger.info("Discarded stale dataset response", extra={"dataset": name})
        else:
            logger.info("Dataset ready", extra={"dataset": name, "rows": len(dataset)})

    @property
    def has_pending(self) -> bool:
        return bool(self._state.pending)

    def wait(self, timeout: Optional[float] = None) -> DashboardState:
        """Block until every in-flight fetch has been adopted or discarded."""
        with self._settled:
            self._settled.wait_for(lambda: not self._state.pending, timeout=timeout)
            return self._state

    # ------------------------------------------------------------------
    # Read views for map / charts / statistics / export
    # ------------------------------------------------------------------
    def visible_datasets(self) -> Dict[str, Dataset]:
        return visible_datasets(self._state)

    def filtered(self, name: str) -> Optional[Dataset]:
        state = self._state
        ds = state.records.get(name) if name in state.selected else None
        if ds is None:
            return None
        return apply_selector(ds, state.selectors.get(name))

    def filtered_all(self) -> Dict[str, Dataset]:
        state = self._state
        return {name: apply_selector(ds, state.selectors.get(name)) for name, ds in visible_datasets(state).items()}

    def combined_filtered(self) -> Dataset:
        state = self._state
        return filter_combined(visible_datasets(state), state.selectors, name=COMBINED_NAME)

    def stats_dataset(self) -> Dataset:
        """Focused dataset (filtered) or the combined filtered corpus."""
        state = self._state
        if state.focused is not None:
            ds = self.filtered(state.focused)
            return ds if ds is not None else Dataset.empty(state.focused)
        return self.combined_filtered()

    def heatmap_datasets(self) -> List[Dataset]:
        state = self._state
        out: List[Dataset] = []
        for name in state.heatmap:
            ds = self.filtered(name)
            if ds is not None:
                out.append(ds)
        return out

    def describe_filters(self) -> Optional[str]:
        return describe_filters(self._state)
