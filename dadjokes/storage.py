"""
Design (storage.py)
- Purpose: Load and save the favourites list to/from disk (pretty-printed JSON array).
- Inputs: Path (from get_favourites_path()), list of DadJoke for save.
- Outputs: list[DadJoke] on load; None on save.
- Side effects: Reads/writes file. Save is atomic (temp file + os.replace).
- Errors: load raises PersistError (absent/unreadable) or DecodeError (malformed);
          save raises PersistError. Callers (FavouritesRepo) decide how to report them.
- Thread-safety: Call while holding the repo lock or from the UI thread only.
"""

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Iterable, List

from .config import APP_DIR_NAME, APP_DIR_SLUG, FAVOURITES_FILENAME
from .errors import DecodeError, PersistError
from .models import DadJoke


def get_data_dir() -> Path:
    """
    Resolve the app-private per-user data directory.
    Windows: %APPDATA%/Dad Jokes. Elsewhere: $XDG_DATA_HOME/dad-jokes (default ~/.local/share).
    The directory is not created here; save_favourites() creates it on demand.
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / APP_DIR_NAME
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_SLUG


def get_favourites_path() -> Path:
    return get_data_dir() / FAVOURITES_FILENAME


def encode_favourites(jokes: Iterable[DadJoke]) -> str:
    """Serialize jokes as a pretty-printed JSON array. Same input always gives the same text."""
    data = [joke.to_dict() for joke in jokes]
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def decode_favourites(text: str) -> List[DadJoke]:
    """
    Purpose: Parse the persisted JSON text back into jokes.
    Raises: DecodeError if the text is not a JSON array of joke objects.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"favourites file is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise DecodeError(f"favourites file must hold a JSON array, got {type(data).__name__}")
    jokes: List[DadJoke] = []
    for index, item in enumerate(data):
        try:
            jokes.append(DadJoke.from_dict(item))
        except DecodeError as exc:
            raise DecodeError(f"favourite #{index}: {exc}") from exc
    return jokes


def load_favourites(path: Path) -> List[DadJoke]:
    """
    Purpose: Read the favourites file.
    Inputs: path to the favourites file.
    Outputs: list[DadJoke] in saved order.
    Raises: PersistError if absent/unreadable, DecodeError if malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError as exc:
        raise PersistError(f"no favourites file at {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistError(f"could not read {path}: {exc}") from exc
    return decode_favourites(text)


def save_favourites(jokes: Iterable[DadJoke], path: Path) -> None:
    """
    Purpose: Overwrite the favourites file with the full list.
    Inputs: jokes, path.
    Side effects: Creates the parent directory if needed. Writes a temp file beside the
                  target and renames it over the target, so the old content is either
                  fully replaced or left untouched.
    Raises: PersistError on any I/O or encoding failure.
    """
    tmp_name = None
    try:
        text = encode_favourites(jokes)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, ValueError) as exc:  # UnicodeEncodeError is a ValueError
        raise PersistError(f"could not write {path}: {exc}") from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
