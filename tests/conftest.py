import pytest
import requests

from dadjokes.models import DadJoke
from dadjokes.repository import FavouritesRepo


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.text is not None:
            raise requests.JSONDecodeError("Expecting value", self.text, 0)
        return self.payload


class FakeSession:
    """Stands in for requests.Session: records calls, returns or raises the queued result."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def joke_a():
    return DadJoke(id="R7UfaahVfFd", joke="My dog used to chase people on a bike a lot. It got so bad I had to take his bike away.", status=200)


@pytest.fixture
def joke_b():
    return DadJoke(id="abc", joke="Why did X?", status=200)


@pytest.fixture
def favourites_path(tmp_path):
    return tmp_path / "data" / "savedFavourites.json"


@pytest.fixture
def repo(favourites_path):
    return FavouritesRepo(favourites_path)
