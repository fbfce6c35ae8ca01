from __future__ import annotations

import os
from collections.abc import Generator

import pytest

from adapters.layout.track_packing import LayoutConfig, TrackPackingEngine
from app.config import AppSettings, LayoutSettings


def _clear_qcl_env() -> None:
    for key in list(os.environ):
        if key.startswith("QCL_"):
            os.environ.pop(key, None)


_clear_qcl_env()


@pytest.fixture(autouse=True)
def clear_qcl_env() -> Generator[None, None, None]:
    _clear_qcl_env()
    yield
    _clear_qcl_env()


@pytest.fixture
def engine() -> TrackPackingEngine:
    return TrackPackingEngine(LayoutConfig())


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(layout=LayoutSettings(title="Test Circuits"))
