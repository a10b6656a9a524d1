"""Entity store package.

Exposes the module-level store instance bound to the app in create_app(),
plus the backend classes for building stores directly.
"""
from studio_portal.store.backends import (
    DatabaseBackend,
    JsonFileBackend,
    MemoryBackend,
    RemoteBackend,
    StoreBackend,
    create_backend,
)
from studio_portal.store.entity_store import Collection, EntityStore

store = EntityStore()

__all__ = [
    'store',
    'Collection',
    'EntityStore',
    'StoreBackend',
    'MemoryBackend',
    'JsonFileBackend',
    'DatabaseBackend',
    'RemoteBackend',
    'create_backend',
]
