"""
Background fetch + favourites flow.

Design:
- Owns the AppState and swaps it through the pure functions in state.py.
- Fetches run in a worker (daemon thread by default) so the UI stays responsive.
- At most one fetch is in flight; a second request while one is pending is ignored.
- Worker results are posted back to the UI thread through `post` (Tk.after in the app).
- Every failure is logged and reported through on_error; nothing propagates to the caller.
- Save policy: after every successful favourite, when the window is minimised, and on close.
- Methods:
    start(): load favourites, then request the first joke
    request_joke(): "Another One!"
    mark_favourite(): heart button
    on_background() / shutdown(): persist favourites
- Thread-safety: State swaps take _lock; Repo does its own locking.
"""

import logging
import threading
from typing import Callable, Optional

from .client import fetch_random_joke
from .errors import DadJokesError, PersistError
from .models import DadJoke
from .repository import FavouritesRepo
from .state import (
    AppState,
    apply_error,
    apply_fetch_failure,
    apply_fetched_joke,
    apply_marked_favourite,
    begin_fetch,
    can_mark_favourite,
    initial_state,
)
from .utils import run_in_thread

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Could not save favourites"


def _call_now(fn: Callable[[], None]) -> None:
    fn()


class JokeFlow:
    def __init__(
        self,
        repo: FavouritesRepo,
        fetcher: Callable[[], DadJoke] = fetch_random_joke,
        on_change: Optional[Callable[[AppState], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
        post: Callable[[Callable[[], None]], None] = _call_now,
        run_in_background: Callable[[Callable[[], None]], None] = run_in_thread,
        autosave: bool = True,
    ):
        self.repo = repo
        self.fetcher = fetcher
        self.on_change = on_change
        self.on_error = on_error
        self.autosave = autosave
        self._post = post
        self._run_in_background = run_in_background
        self._lock = threading.Lock()
        self._state = initial_state()

    @property
    def state(self) -> AppState:
        with self._lock:
            return self._state

    # ---------- lifecycle ----------

    def start(self) -> None:
        """Load saved favourites and ask for the first joke. Both touch disjoint state."""
        self.repo.load()
        self._emit_change()
        self.request_joke()

    def on_background(self) -> Optional[PersistError]:
        logger.info("Window moved to background, saving favourites")
        return self.save()

    def shutdown(self) -> Optional[PersistError]:
        logger.info("Window closing, saving favourites")
        return self.save()

    # ---------- user actions ----------

    def request_joke(self) -> bool:
        """
        Purpose: Start fetching a new joke unless one is already in flight.
        Outputs: True if a fetch was started, False if ignored.
        Side effects: Marks state as fetching; schedules the worker.
        """
        with self._lock:
            if self._state.fetching:
                logger.debug("Fetch already in flight, ignoring request")
                return False
            self._state = begin_fetch(self._state)
        self._emit_change()
        self._run_in_background(self._fetch_worker)
        return True

    def mark_favourite(self) -> bool:
        """
        Purpose: Append the current joke to favourites once per viewing.
        Outputs: True if appended; False if already added or nothing real is on screen.
        Side effects: Mutates Repo; saves when autosave is on.
        """
        with self._lock:
            if not can_mark_favourite(self._state):
                return False
            joke = self._state.current_joke
            self.repo.append(joke)
            self._state = apply_marked_favourite(self._state)
        logger.info("Added joke %s to favourites", joke.id)
        self._emit_change()
        if self.autosave:
            self.save()
        return True

    def save(self) -> Optional[PersistError]:
        error = self.repo.save()
        if error is not None:
            self._report(f"{SAVE_FAILED_MESSAGE}: {error}")
            return error
        with self._lock:
            stale = (self._state.last_error or "").startswith(SAVE_FAILED_MESSAGE)
            if stale:
                self._state = apply_error(self._state, None)
        if stale:
            self._emit_change()
        return None

    # ---------- worker ----------

    def _fetch_worker(self) -> None:
        """Runs off the UI thread. Exactly one _finish_fetch is posted per call."""
        try:
            joke = self.fetcher()
        except DadJokesError as exc:
            logger.error("Could not retrieve or decode a joke: %s", exc)
            message = f"Could not get a new joke: {exc}"
            self._post(lambda: self._finish_fetch(None, message))
            return
        except Exception as exc:
            logger.exception("Unexpected error while fetching a joke")
            message = f"Could not get a new joke: {exc}"
            self._post(lambda: self._finish_fetch(None, message))
            return
        self._post(lambda: self._finish_fetch(joke, None))

    def _finish_fetch(self, joke: Optional[DadJoke], error: Optional[str]) -> None:
        with self._lock:
            if joke is not None:
                self._state = apply_fetched_joke(self._state, joke)
            else:
                self._state = apply_fetch_failure(self._state, error or "unknown error")
        self._emit_change()
        if error is not None and self.on_error is not None:
            self.on_error(error)

    # ---------- callbacks ----------

    def _report(self, message: str) -> None:
        with self._lock:
            self._state = apply_error(self._state, message)
        self._emit_change()
        if self.on_error is not None:
            self.on_error(message)

    def _emit_change(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state)
