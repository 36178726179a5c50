"""
Shared test fixtures and utilities.
"""
import pytest
import jwt
from datetime import datetime, timedelta
from src.core.clock import FixedClock
from src.repositories.event_publisher import InMemoryEventPublisher
from src.repositories.in_memory_asset_store import InMemoryAssetStore
from src.services.authorization import RolePolicy
from src.services.drug_service import DrugService

MANUFACTURER = "Manufacturer"
DISTRIBUTOR = "Distributor"
PHARMACY = "Pharmacy"
REGULATOR = "Regulator"

PARACETAMOL = {
    "drug_id": "D1",
    "name": "Paracetamol",
    "batch_number": "B100",
    "mfg_date": "2024-01-01",
    "expiry_date": "2026-01-01",
    "composition": "500mg",
}


def make_token(role, secret="dev-secret-change-in-production", expires_in=timedelta(hours=1), claim="role"):
    """Encode a JWT carrying the given role claim."""
    payload = {
        "sub": f"{role.lower()}-user" if role else "anonymous",
        "exp": datetime.utcnow() + expires_in,
        "iat": datetime.utcnow()
    }
    if role is not None:
        payload[claim] = role
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def auth_headers():
    """Return a factory for authorization headers for a given role."""
    def _headers(role):
        return {"Authorization": f"Bearer {make_token(role)}"}
    return _headers


@pytest.fixture
def policy():
    return RolePolicy(
        manufacturer_role=MANUFACTURER,
        regulator_role=REGULATOR,
        known_roles=[MANUFACTURER, DISTRIBUTOR, PHARMACY, REGULATOR]
    )


@pytest.fixture
def clock():
    return FixedClock("2024-01-01T00:00:00+00:00")


@pytest.fixture
def asset_store():
    return InMemoryAssetStore()


@pytest.fixture
def event_publisher():
    return InMemoryEventPublisher()


@pytest.fixture
def drug_service(asset_store, event_publisher, policy, clock):
    return DrugService(
        asset_store=asset_store,
        event_publisher=event_publisher,
        policy=policy,
        clock=clock
    )
