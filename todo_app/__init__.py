"""Single-table todo application: API, store, proxy and client."""

__version__ = "1.0.0"
