"""
Top-level package for the geo score browser.

This package exposes the core pipeline (format detection, filtering,
aggregation, coordination), plotly views and the Dash UI adapters.
Most code should import from submodules such as:
    geo_browser.core
    geo_browser.services
    geo_browser.views
    geo_browser.ui
"""

__all__: list[str] = []
