"""Entity store: CRUD over named collections with pluggable persistence.

The store follows the Flask extension pattern used for db: a module-level
instance is bound to an application with init_app(), which picks the
backend from config. A store can also be constructed with an explicit
backend for use outside an application context.

Every mutation reads the current collection from the backend, builds a
new list and saves it whole. If the save raises, the caller gets the
PersistenceError and nothing changes.
"""
import copy
import logging
from typing import List, Optional

from flask import Flask, current_app

from studio_portal import db
from studio_portal.errors import NotFoundError, ValidationError
from studio_portal.models.client_project import new_id
from studio_portal.store.backends import DatabaseBackend, StoreBackend, create_backend
from studio_portal.store.collections import COLLECTIONS, CollectionSpec

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'entity_store'


class Collection:
    """CRUD operations for one collection of records."""

    def __init__(self, store: 'EntityStore', spec: CollectionSpec):
        self._store = store
        self.spec = spec

    @property
    def name(self) -> str:
        return self.spec.name

    def _load(self) -> list[dict]:
        records = self._store.backend.load(self.spec.name)
        if records is None:
            records = self._store.seed_records(self.spec.name)
        return records

    def _save(self, records: list[dict]) -> None:
        self._store.backend.save(self.spec.name, records)

    def _index_of(self, records: list[dict], id: str) -> Optional[int]:
        for index, record in enumerate(records):
            if record.get('id') == id:
                return index
        return None

    def list(self) -> list[dict]:
        """Return all records, normalized for reading."""
        return [self.spec.on_read(record) for record in self._load()]

    def get(self, id: str) -> Optional[dict]:
        """Return the record with this id, or None."""
        records = self._load()
        index = self._index_of(records, id)
        if index is None:
            return None
        return self.spec.on_read(records[index])

    def get_or_404(self, id: str) -> dict:
        """Return the record with this id.

        Raises:
            NotFoundError: If no record has this id.
        """
        record = self.get(id)
        if record is None:
            raise NotFoundError(f"{self.spec.label} not found")
        return record

    def create(self, data: dict) -> dict:
        """Create a record from caller-supplied fields.

        Generates an id when none is supplied, merges the fields onto the
        collection's defaults, normalizes, appends (or prepends for
        newest-first collections) and persists.

        Args:
            data: Field values for the new record.

        Returns:
            The stored record.

        Raises:
            ValidationError: If a required field is missing, a value is
                             invalid or the id is already taken.
            PersistenceError: If the backend save fails.
        """
        data = copy.deepcopy(dict(data or {}))
        self.spec.check_required(data)

        records = self._load()
        record_id = data.get('id') or new_id(self.spec.id_prefix)
        if self._index_of(records, record_id) is not None:
            raise ValidationError(f"{self.spec.label} already exists: {record_id}")

        data['id'] = record_id
        record = self.spec.on_write(self.spec.build(data), set(data))

        if self.spec.newest_first:
            records.insert(0, record)
        else:
            records.append(record)
        self._save(records)

        logger.info("Created %s %s", self.spec.name, record_id)
        return copy.deepcopy(record)

    def update(self, id: str, patch: dict) -> dict:
        """Shallow-merge a partial patch onto an existing record.

        Fields in the patch replace stored values; everything else is
        kept. The id can never be changed.

        Args:
            id: Id of the record to update.
            patch: Fields to change.

        Returns:
            The merged, stored record.

        Raises:
            NotFoundError: If no record has this id.
            ValidationError: If the merged record is invalid.
            PersistenceError: If the backend save fails.
        """
        patch = {k: v for k, v in copy.deepcopy(dict(patch or {})).items() if k != 'id'}

        records = self._load()
        index = self._index_of(records, id)
        if index is None:
            raise NotFoundError(f"{self.spec.label} not found")

        merged = {**records[index], **patch, 'id': id}
        merged = self.spec.on_write(merged, set(patch))
        records[index] = merged
        self._save(records)

        logger.info("Updated %s %s fields=%s", self.spec.name, id, sorted(patch))
        return copy.deepcopy(merged)

    def delete(self, id: str) -> None:
        """Remove the record with this id. Unknown ids are a no-op."""
        records = self._load()
        remaining = [r for r in records if r.get('id') != id]
        if len(remaining) == len(records):
            logger.debug("Delete of missing %s %s ignored", self.spec.name, id)
            return
        self._save(remaining)
        logger.info("Deleted %s %s", self.spec.name, id)

    def prepare(self, records: List[dict]) -> List[dict]:
        """Validate and normalize a full replacement list without saving.

        Records keep their fields as given (no defaults are merged);
        records without an id get one.

        Raises:
            ValidationError: If any record is invalid.
        """
        normalized = []
        for record in copy.deepcopy(list(records or [])):
            if not isinstance(record, dict):
                raise ValidationError(f"{self.spec.label} records must be objects")
            if not record.get('id'):
                record['id'] = new_id(self.spec.id_prefix)
            normalized.append(self.spec.on_write(record, set(record)))
        return normalized

    def replace_all(self, records: List[dict]) -> List[dict]:
        """Replace the whole collection, e.g. on import or reset."""
        normalized = self.prepare(records)
        self._save(normalized)
        logger.info("Replaced %s with %d records", self.spec.name, len(normalized))
        return copy.deepcopy(normalized)


class EntityStore:
    """Holds one Collection per registered CollectionSpec.

    Args:
        backend: Explicit backend. When omitted, the backend bound by
                 init_app() on the current application is used.
        seed: Whether never-persisted collections fall back to seed data.
              Ignored when bound to an app (SEED_DATA config wins).
    """

    def __init__(
        self,
        backend: Optional[StoreBackend] = None,
        seed: bool = False,
        specs: Optional[list[CollectionSpec]] = None,
    ):
        self._backend = backend
        self._seed = seed
        self._collections = {
            spec.name: Collection(self, spec) for spec in (specs or COLLECTIONS)
        }

    def init_app(self, app: Flask) -> None:
        """Bind a backend built from the app's config."""
        backend = create_backend(app.config)
        app.extensions[EXTENSION_KEY] = {
            'backend': backend,
            'seed': bool(app.config.get('SEED_DATA', False)),
        }
        if isinstance(backend, DatabaseBackend):
            with app.app_context():
                db.create_all()

    @property
    def backend(self) -> StoreBackend:
        if self._backend is not None:
            return self._backend
        return current_app.extensions[EXTENSION_KEY]['backend']

    @property
    def seed_enabled(self) -> bool:
        if self._backend is not None:
            return self._seed
        return current_app.extensions[EXTENSION_KEY]['seed']

    def seed_records(self, name: str) -> list[dict]:
        """Seed records for a collection, or [] when seeding is off."""
        if not self.seed_enabled:
            return []
        from studio_portal.seed import seed_collections

        return seed_collections().get(name, [])

    @property
    def names(self) -> list[str]:
        return list(self._collections)

    def collection(self, name: str) -> Collection:
        """Return the named collection.

        Raises:
            NotFoundError: If no collection has this name.
        """
        try:
            return self._collections[name]
        except KeyError:
            raise NotFoundError(f"Unknown collection: {name}") from None

    def export(self) -> dict[str, list[dict]]:
        """Return every collection's records keyed by name."""
        return {name: c.list() for name, c in self._collections.items()}
