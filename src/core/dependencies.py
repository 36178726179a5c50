"""
Dependency injection container for FastAPI.
Provides singleton-like behavior for the lifecycle collaborators and service.
"""
from functools import lru_cache
from src.core import config
from src.core.clock import Clock, SystemClock
from src.repositories.asset_store import AssetStore
from src.repositories.dynamo_asset_store import DynamoAssetStore
from src.repositories.in_memory_asset_store import InMemoryAssetStore
from src.repositories.event_publisher import EventBridgePublisher, EventPublisher, InMemoryEventPublisher
from src.services.authorization import RolePolicy
from src.services.drug_service import DrugService


@lru_cache()
def get_asset_store() -> AssetStore:
    """Get AssetStore singleton instance for the configured backend."""
    backend = config.settings.store_backend
    if backend == "dynamodb":
        return DynamoAssetStore()
    if backend == "memory":
        return InMemoryAssetStore()
    raise ValueError(f"unknown store backend {backend}")


@lru_cache()
def get_event_publisher() -> EventPublisher:
    """Get EventPublisher singleton instance for the configured backend."""
    backend = config.settings.event_backend
    if backend == "eventbridge":
        return EventBridgePublisher()
    if backend == "memory":
        return InMemoryEventPublisher()
    raise ValueError(f"unknown event backend {backend}")


@lru_cache()
def get_clock() -> Clock:
    """Get Clock singleton instance."""
    return SystemClock()


@lru_cache()
def get_role_policy() -> RolePolicy:
    """Get RolePolicy singleton instance built from settings."""
    return RolePolicy.from_settings(config.settings)


@lru_cache()
def get_drug_service() -> DrugService:
    """Get DrugService singleton instance with injected dependencies."""
    return DrugService(
        asset_store=get_asset_store(),
        event_publisher=get_event_publisher(),
        policy=get_role_policy(),
        clock=get_clock()
    )


def clear_dependency_cache() -> None:
    """Drop cached singletons so the next request rebuilds them from settings."""
    for factory in (get_asset_store, get_event_publisher, get_clock, get_role_policy, get_drug_service):
        factory.cache_clear()
