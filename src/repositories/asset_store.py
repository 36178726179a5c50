"""
Abstract base class for asset stores.
Defines the versioned key/blob contract the drug service relies on.
"""
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional


class StoredAsset(NamedTuple):
    """Blob as read from the store plus the version it was written at."""
    data: bytes
    version: int


class AssetStore(ABC):
    """Abstract repository interface for drug record blobs."""
    
    @abstractmethod
    def get(self, asset_id: str) -> Optional[StoredAsset]:
        """Read the blob for asset_id, or None if it was never written."""
        pass
    
    @abstractmethod
    def put(self, asset_id: str, data: bytes, expected_version: Optional[int] = None) -> int:
        """
        Write the blob for asset_id and return its new version.
        
        With expected_version None the key must not exist yet; otherwise the
        stored version must still equal expected_version. A failed condition
        raises WriteConflictException and leaves the stored blob untouched.
        """
        pass
