"""
Design (errors.py)
- Purpose: Error taxonomy shared by the fetcher, the file store and the flow.
- Side effects: None.
"""


class DadJokesError(Exception):
    """Base class for every failure the application reports to the user surface."""


class NetworkError(DadJokesError):
    """Transport failure: no connection, timeout or a non-2xx response."""


class DecodeError(DadJokesError):
    """Response body or file content does not have the expected JSON shape."""


class PersistError(DadJokesError):
    """Favourites file could not be read or written."""
