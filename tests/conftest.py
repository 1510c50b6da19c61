import logging

import pytest

from lensbench.core.config import BenchSettings
from lensbench.optics.state import LensBench


def pytest_configure(config: pytest.Config) -> None:  # noqa: ARG001
    logging.getLogger("lensbench").setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers installed by setup_logging (CLI runs, log tests)."""
    logger = logging.getLogger("lensbench")
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture()
def settings() -> BenchSettings:
    return BenchSettings()


@pytest.fixture()
def bench(settings: BenchSettings) -> LensBench:
    return LensBench(settings)


@pytest.fixture()
def three_lens_bench(bench: LensBench) -> LensBench:
    """Three default lenses with distinct gaps 0.5 m and 1.5 m."""
    for _ in range(3):
        bench.add_lens()
    bench.update_distance(0, 0.5)
    bench.update_distance(1, 1.5)
    return bench
