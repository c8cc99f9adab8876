# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

from typing import Generator

import pytest
from loguru import logger

from coreason_mailshield.main import Redactor
from coreason_mailshield.store import TTLCacheStore
from coreason_mailshield.vault import VaultManager


class ManualClock:
    """Timer injected into the cache so tests control expiry."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def store(clock: ManualClock) -> TTLCacheStore:
    return TTLCacheStore(max_size=100, timer=clock)


@pytest.fixture
def vault(store: TTLCacheStore) -> VaultManager:
    return VaultManager(store=store, ttl_seconds=60)


@pytest.fixture
def redactor(vault: VaultManager) -> Redactor:
    return Redactor(vault=vault)


@pytest.fixture
def log_sink() -> Generator[list[str], None, None]:
    logs: list[str] = []
    handler_id = logger.add(lambda msg: logs.append(str(msg)), level="INFO")
    yield logs
    logger.remove(handler_id)
