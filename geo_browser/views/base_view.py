from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import plotly.graph_objs as go

from geo_browser.core.dataset import Dataset
from geo_browser.core.format_detection import FormatDescriptor

FIGURE_MARGIN = dict(l=40, r=40, t=40, b=40)


def message_figure(message: str) -> go.Figure:
    """
    Standardised 'no data' figure: a title and hidden axes.
    """
    fig = go.Figure()
    fig.update_layout(
        title=message,
        xaxis={"visible": False},
        yaxis={"visible": False},
        margin=FIGURE_MARGIN,
    )
    return fig


class BaseView(ABC):
    """
    Abstract base class for all plot views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - derive plot-ready data from the (already filtered) dataset
    - implement 'render_figure' - used to render the figure using Plotly
    """

    id: str = None
    label: str = None

    def __init__(self, dataset: Dataset, descriptor: Optional[FormatDescriptor] = None):
        self.dataset = dataset
        self.descriptor = descriptor if descriptor is not None else dataset.descriptor

    @abstractmethod
    def compute_data(self) -> Any:
        """
        Compute the data this view plots from its dataset
        :return: data: plot-ready rows (a series list or a dataframe)
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :return: the Plotly figure
        """
        raise NotImplementedError()

    def figure(self) -> go.Figure:
        return self.render_figure(self.compute_data())

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    @property
    def title(self) -> str:
        return f"{self.dataset.name} {self.label}"

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        return message_figure(message)
