"""Package definition store backed by the remote data service."""

from .client import DataServiceClient
from .repository import PackageDefinitionStore, StoreResult, reorder_positions

__all__ = [
    "DataServiceClient",
    "PackageDefinitionStore",
    "StoreResult",
    "reorder_positions",
]
