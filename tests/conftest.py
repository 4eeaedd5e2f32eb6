"""Shared fixtures for minigrep tests."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def isolated_git_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """Point the global git ignore lookup at an empty, per-test directory."""
    xdg = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return xdg


@pytest.fixture(autouse=True)
def reset_minigrep_logger():
    """Drop handlers installed by ``setup_logging`` so they never outlive a test's streams."""
    yield
    logger = logging.getLogger("minigrep")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)
