"""Data service for bulk export, import and reset.

Import and reset validate every collection before writing any of them,
so a bad payload is rejected without a partial import.
"""
import logging
from typing import Optional

from studio_portal.errors import ValidationError
from studio_portal.seed import seed_collections
from studio_portal.store import store

logger = logging.getLogger(__name__)

# An import payload must carry at least these collections
REQUIRED_IMPORT_COLLECTIONS = ['divisions', 'projects', 'team']


def export_data() -> dict[str, list[dict]]:
    """Return every collection keyed by name."""
    return store.export()


def _replace_collections(payload: dict[str, list[dict]]) -> dict[str, list[dict]]:
    prepared = {}
    for name in store.names:
        records = payload.get(name)
        if records is None:
            records = []
        if not isinstance(records, list):
            raise ValidationError(f"Collection {name} must be a list")
        prepared[name] = store.collection(name).prepare(records)

    for name, records in prepared.items():
        store.collection(name).replace_all(records)
    return export_data()


def import_data(payload: dict) -> dict[str, list[dict]]:
    """Replace every collection with the contents of an export document.

    Collections missing from the payload are emptied.

    Args:
        payload: Dictionary of collection name -> records.

    Returns:
        The stored data after import.

    Raises:
        ValidationError: If the payload is not an object, a required
                         collection is missing or any record is invalid.
    """
    if not isinstance(payload, dict):
        raise ValidationError('Import payload must be a JSON object')

    missing = [n for n in REQUIRED_IMPORT_COLLECTIONS if not isinstance(payload.get(n), list)]
    if missing:
        raise ValidationError(f"Invalid data format, missing collections: {missing}")

    unknown = sorted(set(payload) - set(store.names))
    if unknown:
        logger.warning("Ignoring unknown collections in import: %s", unknown)

    data = _replace_collections(payload)
    logger.info("Imported data for %d collections", len(store.names))
    return data


def reset_data() -> dict[str, list[dict]]:
    """Replace every collection with the bundled seed data."""
    data = _replace_collections(seed_collections())
    logger.info("Reset all collections to seed data")
    return data


def get_collection_snapshot(name: str) -> Optional[list[dict]]:
    """Return a collection exactly as persisted, or None if never saved.

    Raises:
        NotFoundError: If the collection name is unknown.
    """
    store.collection(name)
    return store.backend.load(name)


def put_collection_snapshot(name: str, records: list) -> list[dict]:
    """Replace one collection wholesale.

    Raises:
        NotFoundError: If the collection name is unknown.
        ValidationError: If records is not a list or a record is invalid.
    """
    if not isinstance(records, list):
        raise ValidationError('Collection data must be a list')
    return store.collection(name).replace_all(records)
