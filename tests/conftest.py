"""Shared fixtures for the pass_persist agent tests."""

import io
import logging
import os
import sys
from typing import Any, Callable, Generator, List, Optional

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from passpersist.agent import PassPersistAgent  # noqa: E402
from passpersist.app_config import AppConfig  # noqa: E402
from passpersist.app_logger import AppLogger  # noqa: E402
from passpersist.triple_set import SnmpTripleSet  # noqa: E402


@pytest.fixture
def sample_provider() -> Callable[[SnmpTripleSet], None]:
    """Provider with triples at 1.3.1, 1.3.2 and 1.3.5, pushed out of order."""

    def provider(triples: SnmpTripleSet) -> None:
        triples.add("1.3.5", "integer", 5)
        triples.add("1.3.1", "string", "first")
        triples.add("1.3.2", "gauge", 42)

    return provider


@pytest.fixture
def sample_set(sample_provider: Callable[[SnmpTripleSet], None]) -> SnmpTripleSet:
    triples = SnmpTripleSet()
    sample_provider(triples)
    triples.make_index()
    return triples


@pytest.fixture
def run_agent() -> Callable[..., tuple[List[str], Any]]:
    """Run an agent over an in-memory script; returns (output lines, termination reason)."""

    def _run(script: str, provider: Optional[Any] = None, **kwargs: Any) -> tuple[List[str], Any]:
        out = io.StringIO()
        agent = PassPersistAgent(provider, in_fh=io.StringIO(script), out_fh=out, **kwargs)
        reason = agent.run()
        return out.getvalue().splitlines(), reason

    return _run


@pytest.fixture
def pipe_fds() -> Generator[tuple[int, int], None, None]:
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Keep AppConfig and AppLogger state from leaking between tests."""
    root_level = logging.getLogger().level
    AppConfig.reset()
    yield
    AppConfig.reset()
    if AppLogger._configured:
        AppLogger.reset()
    logging.getLogger().setLevel(root_level)
