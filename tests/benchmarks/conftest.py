"""conftest.py for benchmarks.

One :class:`asyncio.Runner` is shared by every benchmark in the session so
loop start-up cost stays out of the measured dispatch latency.
"""

from __future__ import annotations

import asyncio

import pytest


@pytest.fixture(scope="session")
def runner():
    with asyncio.Runner() as session_runner:
        yield session_runner


@pytest.fixture(scope="session")
def run_async(runner):
    """Execute a coroutine on the shared runner.

    Usage inside a benchmark::

        def test_something(benchmark, run_async):
            benchmark(lambda: run_async(mediator.dispatch(cmd)))
    """

    return runner.run
