"""Shared fixtures for the cachetokens test suite."""

import importlib
import os
import textwrap
import uuid
from pathlib import Path
from typing import Callable, Generator
import pytest
from cachetokens.lib.registry import TokenRegistry
from cachetokens.models.dataModel import DelimiterConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep CTR_ environment overrides from leaking into tests."""
    for key in list(os.environ):
        if key.upper().startswith("CTR_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture
def config() -> DelimiterConfig:
    """Delimiters {{ }} | : ,"""
    return DelimiterConfig()


@pytest.fixture
def registry() -> TokenRegistry:
    return TokenRegistry()


@pytest.fixture
def extension_module(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Callable[[str], str]:
    """Write an importable extension module and return its name."""
    monkeypatch.syspath_prepend(str(tmp_path))

    def factory(source: str) -> str:
        name: str = f"ext_{uuid.uuid4().hex}"
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source))
        importlib.invalidate_caches()
        return name

    return factory
