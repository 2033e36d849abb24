"""Shared fixtures and folder-based marker assignment."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from boundforms import logger
from boundforms.settings import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator

_SUITES = ("unit", "integration", "end2end")


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Reload settings for each test so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _suite_of(item: pytest.Item, suite_dirs: dict[str, Path]) -> str | None:
    """Return the suite folder a collected test lives in, if any."""
    try:
        path = Path(str(item.path)).resolve()
    except OSError:
        logger.warning("Could not resolve test path; skipping marker assignment", extra={"test": item.name})
        return None
    for suite, directory in suite_dirs.items():
        if directory in path.parents:
            return suite
    return None


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Mark tests under tests/<suite>/ with the matching suite marker."""
    root = Path(config.rootpath) / "tests"
    suite_dirs = {suite: (root / suite).resolve() for suite in _SUITES}
    for item in items:
        suite = _suite_of(item, suite_dirs)
        if suite is not None:
            item.add_marker(getattr(pytest.mark, suite))
