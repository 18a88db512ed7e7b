from __future__ import annotations

from typing import Dict, List, Optional, Type

from geo_browser.core.dataset import Dataset
from geo_browser.core.format_detection import FormatDescriptor
from geo_browser.views.base_view import BaseView


class ViewRegistry:
    """
    Registry for view classes so the app can build the chart row dynamically

    - Stores subclasses of {@link BaseView}, not instances; views are created per render
    - Each view 'id' is unique across the registry
    """

    def __init__(self):
        self._views: Dict[str, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        Raises:
            TypeError: if view_cls is not a subclass of {@link BaseView}
            ValueError: if a view with same 'id' already exists
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"View '{getattr(view_cls, 'id', view_cls)}' must be a subclass of BaseView")

        if view_cls.id in self._views:
            raise ValueError(f"View '{view_cls.id}' already registered")

        self._views[view_cls.id] = view_cls

    def create(
        self,
        view_id: str,
        dataset: Dataset,
        descriptor: Optional[FormatDescriptor] = None,
    ) -> BaseView:
        """
        Raises:
            KeyError: if no view with the given id exists in the registry
        """
        try:
            cls = self._views[view_id]
        except KeyError:
            raise KeyError(f"View '{view_id}' not found")
        return cls(dataset, descriptor)

    def all_classes(self) -> List[Type[BaseView]]:
        return list(self._views.values())

    def __contains__(self, view_id: object) -> bool:
        return view_id in self._views
