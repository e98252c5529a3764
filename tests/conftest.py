"""Shared fixtures for the Budget Planner tests."""

import pytest

from budget_planner.audit import AuditLogger
from budget_planner.config import get_settings
from budget_planner.services.storage import InMemoryKeyValueStorage, LedgerPersistence
from budget_planner.store import EntryIdGenerator, LedgerStore, create_ledger_store


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def audit_logger():
    return AuditLogger(keep_events=True)


@pytest.fixture
def store(storage, audit_logger):
    return create_ledger_store(storage=storage, audit_logger=audit_logger)


@pytest.fixture
def frozen_clock_store(storage, audit_logger):
    """A store whose clock never advances, to force id tiebreaks."""
    return LedgerStore(
        persistence=LedgerPersistence(storage, audit_logger),
        audit_logger=audit_logger,
        id_generator=EntryIdGenerator(clock=lambda: 1_700_000_000_000),
    )
