"""
Design (state.py)
- Purpose: Hold what the window shows (current joke, favourite flag, fetch/error status)
           as an immutable value, with pure transition functions.
- Inputs: Previous AppState plus the event data (joke, error message).
- Outputs: New AppState; the input is never mutated.
- Side effects: None.
- Thread-safety: Values are frozen; the flow swaps them on the UI thread.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .config import PLACEHOLDER_JOKE_TEXT
from .models import DadJoke

PLACEHOLDER_JOKE = DadJoke(id="", joke=PLACEHOLDER_JOKE_TEXT, status=0)


@dataclass(frozen=True)
class AppState:
    """
    Design (AppState)
    - Fields:
        current_joke: joke on screen (placeholder until the first fetch succeeds)
        added_to_favourites: current joke already favourited in this viewing
        fetching: a fetch is in flight
        last_error: message of the last failure, None once something succeeds
    """
    current_joke: DadJoke = PLACEHOLDER_JOKE
    added_to_favourites: bool = False
    fetching: bool = False
    last_error: Optional[str] = None


def initial_state() -> AppState:
    return AppState()


def begin_fetch(state: AppState) -> AppState:
    return replace(state, fetching=True)


def apply_fetched_joke(state: AppState, joke: DadJoke) -> AppState:
    """New joke on screen; the favourite flag resets even if the joke is already a favourite."""
    return replace(state, current_joke=joke, added_to_favourites=False, fetching=False, last_error=None)


def apply_fetch_failure(state: AppState, message: str) -> AppState:
    """Keep the previous joke (and its flag) on screen, record the failure."""
    return replace(state, fetching=False, last_error=message)


def apply_marked_favourite(state: AppState) -> AppState:
    return replace(state, added_to_favourites=True)


def apply_error(state: AppState, message: Optional[str]) -> AppState:
    return replace(state, last_error=message)


def can_mark_favourite(state: AppState) -> bool:
    return not state.added_to_favourites and not state.current_joke.is_placeholder
