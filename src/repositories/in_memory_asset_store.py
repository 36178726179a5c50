"""In-memory asset store for local development and tests."""

import threading
from typing import Dict, Optional

from src.core.exceptions import WriteConflictException
from src.repositories.asset_store import AssetStore, StoredAsset


class InMemoryAssetStore(AssetStore):
    def __init__(self) -> None:
        self._assets: Dict[str, StoredAsset] = {}
        self._lock = threading.Lock()

    def get(self, asset_id: str) -> Optional[StoredAsset]:
        with self._lock:
            return self._assets.get(asset_id)

    def put(self, asset_id: str, data: bytes, expected_version: Optional[int] = None) -> int:
        with self._lock:
            current = self._assets.get(asset_id)
            current_version = current.version if current else None
            if current_version != expected_version:
                raise WriteConflictException(
                    f"Asset {asset_id} was modified concurrently; retry the operation"
                )
            new_version = (current_version or 0) + 1
            self._assets[asset_id] = StoredAsset(data=bytes(data), version=new_version)
            return new_version
