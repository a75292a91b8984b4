"""
Design (models.py)
- Purpose: Define the typed data structure for the domain entity (DadJoke) and its JSON shape.
- Inputs: Field values, or a decoded JSON object.
- Outputs: Dataclass instances; plain dicts for encoding.
- Side effects: None.
- Thread-safety: DadJoke is frozen, safe to share between threads.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .errors import DecodeError


@dataclass(frozen=True)
class DadJoke:
    """
    Design (DadJoke)
    - Purpose: One joke as served by the remote endpoint and stored in favourites.
    - Fields:
        id: opaque identifier assigned by the remote source ("" for the placeholder).
        joke: joke text.
        status: integer echoed in the payload (not the HTTP status).
    """
    id: str
    joke: str
    status: int

    @classmethod
    def from_dict(cls, data: Any) -> "DadJoke":
        """
        Purpose: Build a DadJoke from a decoded JSON object.
        Inputs: data (expected dict with id:str, joke:str, status:int; extra keys ignored)
        Outputs: DadJoke
        Raises: DecodeError when the shape does not match.
        """
        if not isinstance(data, dict):
            raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
        missing = [key for key in ("id", "joke", "status") if key not in data]
        if missing:
            raise DecodeError(f"missing key(s): {', '.join(missing)}")
        joke_id, text, status = data["id"], data["joke"], data["status"]
        if not isinstance(joke_id, str):
            raise DecodeError("'id' must be a string")
        if not isinstance(text, str):
            raise DecodeError("'joke' must be a string")
        for key, value in (("id", joke_id), ("joke", text)):
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise DecodeError(f"'{key}' is not valid UTF-8 text: {exc}") from exc
        # bool is an int subclass; reject it explicitly
        if not isinstance(status, int) or isinstance(status, bool):
            raise DecodeError("'status' must be an integer")
        return cls(id=joke_id, joke=text, status=status)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "joke": self.joke, "status": self.status}

    @property
    def is_placeholder(self) -> bool:
        return not self.id
