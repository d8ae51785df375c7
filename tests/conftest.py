"""Pytest configuration and fixtures."""

import os
import random
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"

from slotshare import models  # noqa: F401
from slotshare.database import Base, get_db
from slotshare.main import app
from slotshare.schemas.availability import AvailabilityCreate, TimeSlot
from slotshare.services.availability import (
    AvailabilityService,
    get_availability_service,
)
from slotshare.services.clock import MonotonicClock
from slotshare.services.identifiers import IdGenerator
from slotshare.services.lookup import LookupIndex
from slotshare.services.search import SearchService, get_search_service


@pytest.fixture
def engine():
    """Create an isolated in-memory database for a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def lookup_index() -> LookupIndex:
    """Fresh lookup index per test."""
    return LookupIndex()


@pytest.fixture
def service(lookup_index: LookupIndex) -> AvailabilityService:
    """Availability service with a seeded ID generator."""
    return AvailabilityService(
        lookup=lookup_index,
        id_generator=IdGenerator(rng=random.Random(1234)),
        clock=MonotonicClock(),
    )


@pytest.fixture
def search_service(service: AvailabilityService) -> SearchService:
    """Search service sharing the test's lookup index."""
    return SearchService(service)


@pytest.fixture
def client(
    db_session: Session, service: AvailabilityService, search_service: SearchService
) -> Generator[TestClient, None, None]:
    """Create a test client with database and service overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_availability_service] = lambda: service
    app.dependency_overrides[get_search_service] = lambda: search_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_request():
    """Factory for valid create requests, Monday 09:00-10:00 by default."""

    def _make_request(**overrides) -> AvailabilityCreate:
        data = {
            "title": "Office hours",
            "description": "Weekly office hours",
            "slots": [TimeSlot(day_of_week=1, start_time=540, end_time=600)],
            "timezone": "Europe/Berlin",
        }
        data.update(overrides)
        return AvailabilityCreate(**data)

    return _make_request
