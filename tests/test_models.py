import json

import pytest

from dadjokes.errors import DecodeError
from dadjokes.models import DadJoke


def test_from_dict_reads_wire_shape():
    joke = DadJoke.from_dict({"id": "abc", "joke": "Why did X?", "status": 200})
    assert joke == DadJoke(id="abc", joke="Why did X?", status=200)


def test_from_dict_ignores_extra_keys():
    joke = DadJoke.from_dict({"id": "abc", "joke": "hi", "status": 200, "lang": "en"})
    assert joke.to_dict() == {"id": "abc", "joke": "hi", "status": 200}


@pytest.mark.parametrize(
    "payload",
    [
        [],
        "joke",
        {"id": "abc", "joke": "hi"},
        {"id": 1, "joke": "hi", "status": 200},
        {"id": "abc", "joke": None, "status": 200},
        {"id": "abc", "joke": "hi", "status": "200"},
        {"id": "abc", "joke": "hi", "status": True},
    ],
)
def test_from_dict_rejects_bad_shapes(payload):
    with pytest.raises(DecodeError):
        DadJoke.from_dict(payload)


def test_jokes_are_hashable_and_compare_by_value():
    a = DadJoke(id="x", joke="y", status=200)
    assert a == DadJoke(id="x", joke="y", status=200)
    assert len({a, DadJoke(id="x", joke="y", status=200)}) == 1


def test_placeholder_has_no_id():
    assert DadJoke(id="", joke="...", status=0).is_placeholder
    assert not DadJoke(id="abc", joke="...", status=200).is_placeholder


@pytest.mark.parametrize("key", ["id", "joke"])
def test_from_dict_rejects_lone_surrogates(key):
    payload = json.loads('{"id": "s1", "joke": "plain text", "status": 200}')
    payload[key] = json.loads('"bad \\ud83d text"')
    with pytest.raises(DecodeError):
        DadJoke.from_dict(payload)


def test_from_dict_accepts_non_ascii_text():
    payload = json.loads('{"id": "u1", "joke": "Caf\\u00e9 \\ud83d\\ude00", "status": 200}')
    assert DadJoke.from_dict(payload).joke == "Café \U0001F600"
