"""pytest fixtures handing each test its own :class:`MockEngine`.

Enable with ``pytest_plugins = ["mockledger.pytest_plugin"]`` in a top-level
``conftest.py``.
"""

from __future__ import annotations

import itertools
from typing import Any, Callable

import pytest

from mockledger.core.engine import MockEngine
from mockledger.schemas.config import EngineConfig


@pytest.fixture
def mock_engine(request: pytest.FixtureRequest) -> MockEngine:
    return MockEngine(EngineConfig(name=request.node.name))


@pytest.fixture
def mock_engine_factory(request: pytest.FixtureRequest) -> Callable[..., MockEngine]:
    """Build extra engines for the current test; config overrides go as keywords."""
    counter = itertools.count()

    def factory(**overrides: Any) -> MockEngine:
        if "name" not in overrides:
            overrides["name"] = f"{request.node.name}[{next(counter)}]"
        return MockEngine(EngineConfig(**overrides))

    return factory
