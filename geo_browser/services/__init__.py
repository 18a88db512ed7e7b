"""Service layer: dataset sources, asynchronous fetching and export."""
