"""A recipe gallery: a SQLite recipe and comment store, a JSON API client and a Flask web frontend."""

__version__ = "0.1.0"