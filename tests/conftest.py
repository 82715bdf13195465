"""Shared test fixtures."""

import pytest

from src.mp_listing.infrastructure.persistence import InMemoryListingRepository
from src.mp_listing.infrastructure.snapshot_store import InMemorySnapshotStore
from src.mp_marketplace.application.facade import MarketplaceFacade
from src.mp_marketplace.domain.identity import Identity, SessionIdentityProvider
from src.mp_premium.domain.lifecycle import PremiumLifecycle
from tests.factories import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def premium(clock: FakeClock) -> PremiumLifecycle:
    return PremiumLifecycle(clock=clock)


@pytest.fixture
def repo(clock: FakeClock, premium: PremiumLifecycle) -> InMemoryListingRepository:
    return InMemoryListingRepository(clock=clock, premium=premium)


@pytest.fixture
def store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def identity() -> SessionIdentityProvider:
    return SessionIdentityProvider(Identity(id="user-42", display_name="Trail Rat"))


@pytest.fixture
def facade(repo, store, identity, premium) -> MarketplaceFacade:
    return MarketplaceFacade(repo, store, identity, premium=premium)
