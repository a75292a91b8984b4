import json

import pytest

from dadjokes.errors import DecodeError, NetworkError, PersistError
from dadjokes.flow import JokeFlow
from dadjokes.models import DadJoke
from dadjokes.state import PLACEHOLDER_JOKE


def run_now(fn):
    fn()


class QueueFetcher:
    """Returns (or raises) queued results in order."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class Recorder:
    def __init__(self):
        self.states = []
        self.errors = []

    def on_change(self, state):
        self.states.append(state)

    def on_error(self, message):
        self.errors.append(message)


def make_flow(repo, fetcher, recorder=None, **kwargs):
    recorder = recorder or Recorder()
    kwargs.setdefault("run_in_background", run_now)
    return JokeFlow(
        repo,
        fetcher=fetcher,
        on_change=recorder.on_change,
        on_error=recorder.on_error,
        **kwargs,
    )


def test_start_loads_favourites_and_fetches_first_joke(repo, joke_a, joke_b):
    repo.append(joke_a)
    repo.save()
    repo.replace_all([])
    flow = make_flow(repo, QueueFetcher(joke_b))

    flow.start()

    assert repo.snapshot() == [joke_a]
    assert flow.state.current_joke == joke_b
    assert not flow.state.fetching


def test_first_run_without_file_starts_empty(repo, joke_b):
    recorder = Recorder()
    flow = make_flow(repo, QueueFetcher(joke_b), recorder)

    flow.start()

    assert repo.snapshot() == []
    assert recorder.errors == []


def test_fetch_updates_display_and_resets_flag(repo, joke_b):
    payload = {"id": "abc", "joke": "Why did X?", "status": 200}
    flow = make_flow(repo, QueueFetcher(joke_b, DadJoke.from_dict(payload)))
    flow.request_joke()
    flow.mark_favourite()
    assert flow.state.added_to_favourites

    flow.request_joke()

    assert flow.state.current_joke.joke == "Why did X?"
    assert not flow.state.added_to_favourites


def test_flag_resets_even_when_new_joke_is_already_a_favourite(repo, joke_a):
    flow = make_flow(repo, QueueFetcher(joke_a, joke_a))
    flow.request_joke()
    flow.mark_favourite()

    flow.request_joke()

    assert not flow.state.added_to_favourites
    assert flow.mark_favourite()
    assert repo.snapshot() == [joke_a, joke_a]


@pytest.mark.parametrize("error", [NetworkError("offline"), DecodeError("bad json"), RuntimeError("boom")])
def test_failed_fetch_keeps_previous_joke(repo, joke_a, error):
    recorder = Recorder()
    flow = make_flow(repo, QueueFetcher(joke_a, error), recorder)
    flow.request_joke()
    flow.mark_favourite()

    assert flow.request_joke()

    assert flow.state.current_joke == joke_a
    assert flow.state.added_to_favourites
    assert not flow.state.fetching
    assert flow.state.last_error
    assert len(recorder.errors) == 1


def test_failed_first_fetch_keeps_placeholder(repo):
    flow = make_flow(repo, QueueFetcher(NetworkError("offline")))
    flow.start()
    assert flow.state.current_joke == PLACEHOLDER_JOKE
    assert not flow.mark_favourite()
    assert repo.snapshot() == []


def test_mark_favourite_only_once_per_viewing(repo, joke_a):
    flow = make_flow(repo, QueueFetcher(joke_a))
    flow.request_joke()

    assert flow.mark_favourite()
    assert not flow.mark_favourite()
    assert repo.snapshot() == [joke_a]


def test_second_request_while_in_flight_is_ignored(repo, joke_a, joke_b):
    pending = []
    fetcher = QueueFetcher(joke_a, joke_b)
    flow = make_flow(repo, fetcher, run_in_background=pending.append)

    assert flow.request_joke()
    assert flow.state.fetching
    assert not flow.request_joke()
    assert len(pending) == 1

    pending.pop()()
    assert flow.state.current_joke == joke_a
    assert fetcher.calls == 1

    assert flow.request_joke()


def test_results_are_posted_to_ui_thread(repo, joke_a):
    posted = []
    flow = make_flow(repo, QueueFetcher(joke_a), post=posted.append)

    flow.request_joke()
    assert flow.state.current_joke == PLACEHOLDER_JOKE

    posted.pop()()
    assert flow.state.current_joke == joke_a


def test_favourite_a_then_b_persists_in_order(repo, favourites_path, joke_a, joke_b):
    flow = make_flow(repo, QueueFetcher(joke_a, joke_b), autosave=False)
    flow.request_joke()
    flow.mark_favourite()
    flow.request_joke()
    flow.mark_favourite()
    assert not favourites_path.exists()

    assert flow.on_background() is None

    saved = json.loads(favourites_path.read_text(encoding="utf-8"))
    assert saved == [joke_a.to_dict(), joke_b.to_dict()]


def test_autosave_writes_after_each_favourite(repo, favourites_path, joke_a):
    flow = make_flow(repo, QueueFetcher(joke_a))
    flow.request_joke()
    flow.mark_favourite()

    saved = json.loads(favourites_path.read_text(encoding="utf-8"))
    assert saved == [joke_a.to_dict()]


def test_shutdown_saves(repo, favourites_path, joke_a):
    flow = make_flow(repo, QueueFetcher(joke_a), autosave=False)
    flow.request_joke()
    flow.mark_favourite()

    flow.shutdown()

    assert json.loads(favourites_path.read_text(encoding="utf-8")) == [joke_a.to_dict()]


def test_save_failure_is_reported_not_raised(tmp_path, joke_a):
    from dadjokes.repository import FavouritesRepo

    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    repo = FavouritesRepo(blocker / "savedFavourites.json")
    recorder = Recorder()
    flow = make_flow(repo, QueueFetcher(joke_a), recorder)
    flow.request_joke()

    assert flow.mark_favourite()

    assert repo.snapshot() == [joke_a]
    assert recorder.errors and "Could not save" in recorder.errors[0]
    assert flow.state.last_error == recorder.errors[0]


def test_joke_with_lone_surrogate_is_rejected_and_saving_still_works(repo, favourites_path, joke_a):
    from conftest import FakeResponse, FakeSession
    from dadjokes.client import fetch_random_joke

    bad_payload = json.loads('{"id": "s1", "joke": "bad \\ud83d text", "status": 200}')
    session = FakeSession(FakeResponse(bad_payload))
    replies = [lambda: joke_a, lambda: fetch_random_joke(session=session)]
    recorder = Recorder()
    flow = make_flow(repo, lambda: replies.pop(0)(), recorder)

    flow.request_joke()
    flow.request_joke()

    assert flow.state.current_joke == joke_a
    assert len(recorder.errors) == 1
    assert flow.mark_favourite()
    assert json.loads(favourites_path.read_text(encoding="utf-8")) == [joke_a.to_dict()]


def test_save_error_from_unencodable_joke_is_reported_not_raised(repo, joke_a):
    broken = DadJoke(id="s1", joke="bad \ud83d text", status=200)
    recorder = Recorder()
    flow = make_flow(repo, QueueFetcher(broken), recorder)
    flow.request_joke()

    assert flow.mark_favourite()
    assert flow.shutdown() is not None
    assert flow.on_background() is not None
    assert recorder.errors


def test_successful_save_clears_stale_save_error(repo, favourites_path, joke_a, monkeypatch):
    from dadjokes import repository

    real_save = repository.save_favourites

    def failing_save(jokes, path):
        raise PersistError("disk full")

    monkeypatch.setattr(repository, "save_favourites", failing_save)
    recorder = Recorder()
    flow = make_flow(repo, QueueFetcher(joke_a), recorder)
    flow.request_joke()
    flow.mark_favourite()
    assert flow.state.last_error.startswith("Could not save favourites")

    monkeypatch.setattr(repository, "save_favourites", real_save)
    assert flow.on_background() is None

    assert flow.state.last_error is None
    assert recorder.states[-1].last_error is None


def test_successful_save_keeps_fetch_error(repo, joke_a):
    flow = make_flow(repo, QueueFetcher(joke_a, NetworkError("offline")), autosave=False)
    flow.request_joke()
    flow.request_joke()

    assert flow.save() is None
    assert flow.state.last_error.startswith("Could not get a new joke")
