"""
Pytest configuration and shared fixtures.
"""

import itertools
from typing import Callable, Dict, Any

import pytest

from schoolplacement.core.models import Highschool, SchoolLevel
from schoolplacement.core.repositories import InMemoryRepository
from schoolplacement.logger import get_logger, reset_logger
from schoolplacement.service import PlacementService

MINISTRY = "ministry-principal"


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh, console-free global logger for every test."""
    reset_logger()
    logger = get_logger(enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Sequential ids, so key order matches creation order."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter):04d}"


@pytest.fixture
def service(id_factory) -> PlacementService:
    """In-memory service with no ministry yet."""
    return PlacementService(
        InMemoryRepository(),
        InMemoryRepository(),
        InMemoryRepository(),
        id_factory=id_factory,
    )


@pytest.fixture
def ministry_service(service) -> PlacementService:
    """Service whose ministry is MINISTRY."""
    service.initialize_ministry(MINISTRY).unwrap()
    return service


@pytest.fixture
def highschool_payload() -> Dict[str, Any]:
    return {"name": "Alliance High", "phone": "0700", "levelRank": 4, "county": "Kiambu"}


@pytest.fixture
def make_highschool() -> Callable[..., Highschool]:
    def _make(id: str, level: SchoolLevel, name: str = "School", county: str = "Nairobi") -> Highschool:
        return Highschool(id=id, name=name, phone="0700", level=level, county=county)
    return _make
