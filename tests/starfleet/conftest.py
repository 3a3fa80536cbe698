from __future__ import annotations

import random

import pytest

from starfleet.game.app.scheduler import Scheduler
from starfleet.game.app.services.battle import BattleService
from starfleet.game.core.rules import GameSession
from starfleet.game.infra.config import GameSettings
from starfleet.game.persistence.repository import MissionRepository
from starfleet.game.persistence.store import MemoryStore
from tests.starfleet.helpers import make_known_session


@pytest.fixture
def known_session() -> GameSession:
    return make_known_session()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def repository(memory_store: MemoryStore) -> MissionRepository:
    return MissionRepository(memory_store)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def service_factory(repository: MissionRepository, scheduler: Scheduler):
    def _make(seed: int = 1337) -> BattleService:
        return BattleService(
            repository=repository,
            scheduler=scheduler,
            rng=random.Random(seed),
            settings=GameSettings(cpu_delay_seconds=0.45),
        )

    return _make
