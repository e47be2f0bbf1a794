from __future__ import annotations

import os
import re
import subprocess
import sys
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from commonkit.core.exceptions import SerializationError
from commonkit.services.cache_keys import (
    cache_key,
    fingerprint,
    fnv1a_32,
    to_cache_key_fast,
    to_cache_key_stable,
    type_tag,
)
from commonkit.utils.serialization import canonical_dumps

KEY_RE = re.compile(r"^(?:(?P<prefix>.+)_)?(?P<tag>[A-Za-z_][A-Za-z0-9_]*)_(?P<hash>[0-9A-F]{8})$")
REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", 0x811C9DC5),
        ("a", 0xE40C292C),
        ("foobar", 0xBF9CF968),
    ],
)
def test_fnv1a_reference_vectors(text, expected):
    assert fnv1a_32(text) == expected


def test_fnv1a_hashes_utf16_code_units():
    # U+1F600 は UTF-16 でサロゲートペア (0xD83D, 0xDE00)
    h = 2166136261
    for unit in (0xD83D, 0xDE00):
        h = ((h ^ unit) * 16777619) & 0xFFFFFFFF
    assert fnv1a_32("\U0001F600") == h


def test_stable_key_format(person):
    key = to_cache_key_stable(person)
    assert key.startswith("Person_")
    assert re.fullmatch(r"Person_[0-9A-F]{8}", key)
    assert key == f"Person_{fnv1a_32(canonical_dumps(person)):08X}"


def test_prefix_is_prepended(person):
    assert to_cache_key_stable(person, "App1") == "App1_" + to_cache_key_stable(person, None)


@pytest.mark.parametrize("prefix", [None, ""])
def test_empty_prefix_is_ignored(person, prefix):
    assert to_cache_key_stable(person, prefix) == to_cache_key_stable(person)


def test_equal_values_share_key(person):
    assert to_cache_key_stable(type(person)(id=1, name="John")) == to_cache_key_stable(person)
    assert to_cache_key_stable({"a": 1, "b": 2}) == to_cache_key_stable({"b": 2, "a": 1})


def test_different_values_same_tag_different_hash(person):
    first = KEY_RE.match(to_cache_key_stable(person))
    second = KEY_RE.match(to_cache_key_stable(type(person)(id=2, name="Jane")))
    assert first["tag"] == second["tag"] == "Person"
    assert first["hash"] != second["hash"]


def test_distinct_values_rarely_collide():
    keys = {to_cache_key_stable({"id": i}) for i in range(500)}
    assert len(keys) == 500


def test_type_name_overrides_tag():
    assert to_cache_key_stable({"id": 1}, type_name="Person").startswith("Person_")
    assert type_tag({"id": 1}) == "dict"


def test_injected_serializer_is_used():
    class UpperSerializer:
        def dumps(self, value):
            return str(value).upper()

    key = to_cache_key_stable("abc", serializer=UpperSerializer())
    assert key == f"str_{fnv1a_32('ABC'):08X}"


def test_fingerprint_alias():
    assert fingerprint is to_cache_key_stable


def test_serialization_failure_propagates_and_is_logged():
    data: dict = {}
    data["loop"] = data
    with capture_logs() as logs:
        with pytest.raises(SerializationError):
            to_cache_key_stable(data)
    failures = [entry for entry in logs if entry["event"] == "cache_key_serialization_failed"]
    assert len(failures) == 1
    assert failures[0]["log_level"] == "warning"
    assert failures[0]["type_tag"] == "dict"


def test_fast_key_shape_and_in_process_determinism(person):
    key = to_cache_key_fast(person, "App1")
    assert re.fullmatch(r"App1_Person_[0-9A-F]{8}", key)
    assert key == to_cache_key_fast(person, "App1")


def test_fast_key_fails_on_unserializable_value():
    with pytest.raises(SerializationError):
        to_cache_key_fast({"handle": object()})


def test_cache_key_uses_configured_prefix(make_settings, person):
    settings = make_settings(cache_key_prefix="svc")
    assert cache_key(person, settings=settings) == "svc_" + to_cache_key_stable(person)
    assert cache_key(person, settings=make_settings()) == to_cache_key_stable(person)


def test_cache_key_reads_prefix_from_env(monkeypatch, person):
    monkeypatch.setenv("COMMONKIT_CACHE_KEY_PREFIX", "envsvc")
    assert cache_key(person).startswith("envsvc_Person_")


MIXED_VALUE_EXPR = "{'b': [1, 2.5, None], 'a': 'caf\\u00e9'}"
NESTED_SET_EXPR = "{frozenset({'alpha'}), frozenset({'beta'}), frozenset({'gamma'}), frozenset({'delta'})}"


def _key_in_subprocess(hash_seed: str, value_expr: str = MIXED_VALUE_EXPR) -> str:
    code = (
        "from commonkit.services.cache_keys import to_cache_key_stable;"
        f"print(to_cache_key_stable({value_expr}, 'App1'))"
    )
    env = dict(os.environ)
    env["PYTHONHASHSEED"] = hash_seed
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    result = subprocess.run(
        [sys.executable, "-c", code],
        capture_output=True,
        text=True,
        env=env,
        check=True,
        timeout=60,
    )
    return result.stdout.strip()


def test_stable_key_is_identical_across_processes():
    expected = to_cache_key_stable({"a": "café", "b": [1, 2.5, None]}, "App1")
    assert _key_in_subprocess("1") == expected
    assert _key_in_subprocess("4242") == expected


def test_set_of_frozensets_key_is_identical_across_hash_seeds():
    value = {frozenset({"alpha"}), frozenset({"beta"}), frozenset({"gamma"}), frozenset({"delta"})}
    expected = to_cache_key_stable(value, "App1")
    keys = {_key_in_subprocess(seed, NESTED_SET_EXPR) for seed in ("0", "1", "2", "3", "7", "11")}
    assert keys == {expected}


def test_foreign_serializer_errors_become_serialization_errors():
    class StrictSerializer:
        def dumps(self, value):
            raise TypeError("unsupported value")

    with capture_logs() as logs:
        with pytest.raises(SerializationError) as excinfo:
            to_cache_key_stable("abc", serializer=StrictSerializer())
    assert isinstance(excinfo.value.__cause__, TypeError)
    assert [entry["event"] for entry in logs] == ["cache_key_serialization_failed"]
