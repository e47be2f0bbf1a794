# tests/conftest.py
from __future__ import annotations

from dataclasses import dataclass

import pytest

from commonkit.core.config import Settings, get_settings


@dataclass
class Person:
    id: int
    name: str


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch):
    # 外部環境の COMMONKIT_* に左右されないよう固定
    for key in ("COMMONKIT_CACHE_KEY_PREFIX", "COMMONKIT_LOG_LEVEL", "COMMONKIT_LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def person() -> Person:
    return Person(id=1, name="John")


@pytest.fixture
def make_settings():
    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make
