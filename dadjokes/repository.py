"""
Design (repository.py)
- Purpose: Encapsulate the favourites list behind a tiny API (and a lock), so the UI and the
           fetch worker don't touch a shared list directly. Owns load/save of that list.
- Inputs: DadJoke objects; path of the favourites file.
- Outputs: Snapshots (copies) of the current favourites; explicit save results.
- Side effects: Mutates the internal list; load/save touch the file via storage.
- Errors: Never raises from load()/save(); failures are logged, load() keeps the current
          list and save() returns the PersistError.
- Thread-safety: All mutating/reading methods take the internal lock; snapshot returns a copy.
"""

import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import DecodeError, PersistError
from .models import DadJoke
from .storage import get_favourites_path, load_favourites, save_favourites

logger = logging.getLogger(__name__)


class FavouritesRepo:
    """
    Design (FavouritesRepo)
    - State:
        _jokes: [DadJoke] in insertion order, duplicates allowed
        _path: favourites file location
        _lock: threading.Lock to protect all mutating/reading operations
    - Dedup is not enforced here: the flow decides whether the current joke was already
      added in this viewing.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._lock = threading.Lock()
        self._jokes: List[DadJoke] = []
        self._path = path if path is not None else get_favourites_path()

    # -------- list operations --------

    def append(self, joke: DadJoke) -> None:
        """
        Purpose: Add a joke to the end of the list.
        Inputs: joke (DadJoke)
        Side effects: Mutates _jokes.
        Thread-safety: Protected by _lock.
        """
        with self._lock:
            self._jokes.append(joke)

    def replace_all(self, jokes: Iterable[DadJoke]) -> None:
        with self._lock:
            self._jokes = list(jokes)

    def snapshot(self) -> List[DadJoke]:
        """Return a copy of the list for safe iteration."""
        with self._lock:
            return list(self._jokes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jokes)

    # -------- persistence --------

    def load(self) -> List[DadJoke]:
        """
        Purpose: Replace the in-memory list with the persisted one.
        Outputs: Snapshot after loading (unchanged list if loading failed).
        Side effects: Reads the favourites file; logs failures.
        """
        try:
            jokes = load_favourites(self._path)
        except PersistError as exc:
            if not self._path.exists():
                logger.info("No saved favourites yet (%s)", self._path)
            else:
                logger.error("Could not load favourites: %s", exc)
            return self.snapshot()
        except DecodeError as exc:
            logger.error("Saved favourites are malformed, keeping current list: %s", exc)
            return self.snapshot()
        self.replace_all(jokes)
        logger.info("Loaded %d favourite(s) from %s", len(jokes), self._path)
        return jokes

    def save(self) -> Optional[PersistError]:
        """
        Purpose: Write the whole list to the favourites file.
        Outputs: None on success, the PersistError on failure (never raised).
        Thread-safety: Holds _lock while writing so the file matches one consistent list.
        """
        with self._lock:
            jokes = list(self._jokes)
            try:
                save_favourites(jokes, self._path)
            except PersistError as exc:
                logger.error("Could not save favourites: %s", exc)
                return exc
            except Exception as exc:
                logger.exception("Unexpected error while saving favourites")
                return PersistError(f"could not write {self._path}: {exc}")
        logger.info("Saved %d favourite(s) to %s", len(jokes), self._path)
        return None
