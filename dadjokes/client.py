"""
Design (client.py)
- Purpose: Fetch one random joke from the remote JSON endpoint.
- Inputs: Optional requests.Session, URL and timeout (defaults from config).
- Outputs: DadJoke.
- Side effects: One HTTP GET per call. No retry, no caching.
- Thread-safety: Stateless; safe to call from a worker thread.
"""

import logging
from typing import Optional

import requests

from .config import JOKE_API_URL, REQUEST_TIMEOUT_SEC, USER_AGENT
from .errors import DecodeError, NetworkError
from .models import DadJoke

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "Accept": "application/json",
    "User-Agent": USER_AGENT,
}


def fetch_random_joke(
    session: Optional[requests.Session] = None,
    url: str = JOKE_API_URL,
    timeout: float = REQUEST_TIMEOUT_SEC,
) -> DadJoke:
    """
    Purpose: GET a random joke and decode it.
    Inputs: session (optional; module-level requests.get when None), url, timeout (seconds).
    Outputs: DadJoke decoded from the response body.
    Raises:
        NetworkError: connection failure, timeout or non-2xx status.
        DecodeError: body is not JSON or not a joke object.
    """
    http = session if session is not None else requests
    logger.debug("GET %s", url)
    try:
        response = http.get(url, headers=REQUEST_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise NetworkError(f"could not reach {url}: {exc}") from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise DecodeError(f"response from {url} is not JSON: {exc}") from exc

    joke = DadJoke.from_dict(payload)
    logger.info("Fetched joke %s", joke.id)
    return joke
