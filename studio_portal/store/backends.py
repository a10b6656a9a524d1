"""Persistence backends for the entity store.

Every backend implements the same two-call contract:

    load(name) -> list of record dicts, or None if never persisted
    save(name, records) -> None, replacing the whole collection

Backends hold no business logic. Any failure is raised as
PersistenceError with the original exception chained; a failed save
leaves the previously stored collection untouched.
"""
import copy
import json
import logging
import os
import tempfile
from typing import Optional

import requests
from sqlalchemy.exc import SQLAlchemyError

from studio_portal import db
from studio_portal.errors import PersistenceError
from studio_portal.models import CollectionSnapshot

logger = logging.getLogger(__name__)


class StoreBackend:
    """Base class for persistence backends."""

    name = 'base'

    def load(self, name: str) -> Optional[list[dict]]:
        raise NotImplementedError

    def save(self, name: str, records: list[dict]) -> None:
        raise NotImplementedError


class MemoryBackend(StoreBackend):
    """Keeps collections in a dict. Used by tests and throwaway instances."""

    name = 'memory'

    def __init__(self, initial: Optional[dict] = None):
        self._collections = copy.deepcopy(initial or {})

    def load(self, name: str) -> Optional[list[dict]]:
        if name not in self._collections:
            return None
        return copy.deepcopy(self._collections[name])

    def save(self, name: str, records: list[dict]) -> None:
        self._collections[name] = copy.deepcopy(records)


class JsonFileBackend(StoreBackend):
    """Stores every collection in one JSON document on disk.

    Writes go to a temporary file in the same directory which is then
    renamed over the original, so a crash mid-write never leaves a
    truncated document behind.
    """

    name = 'file'

    def __init__(self, path: str):
        self.path = path

    def _read_document(self) -> dict:
        try:
            with open(self.path, encoding='utf-8') as fh:
                document = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Could not read {self.path}: {exc}") from exc

        if not isinstance(document, dict):
            raise PersistenceError(f"{self.path} does not contain a JSON object")
        return document

    def load(self, name: str) -> Optional[list[dict]]:
        value = self._read_document().get(name)
        return value if isinstance(value, list) else None

    def save(self, name: str, records: list[dict]) -> None:
        document = self._read_document()
        document[name] = records

        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                'w', encoding='utf-8', dir=directory, suffix='.tmp', delete=False
            ) as fh:
                tmp_path = fh.name
                json.dump(document, fh, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceError(f"Could not write {self.path}: {exc}") from exc


class DatabaseBackend(StoreBackend):
    """Stores each collection as one CollectionSnapshot row.

    Requires an application context (uses the Flask-SQLAlchemy session).
    """

    name = 'database'

    def load(self, name: str) -> Optional[list[dict]]:
        try:
            snapshot = db.session.get(CollectionSnapshot, name)
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(f"Could not load {name}: {exc}") from exc

        if snapshot is None:
            return None
        return copy.deepcopy(snapshot.records or [])

    def save(self, name: str, records: list[dict]) -> None:
        try:
            snapshot = db.session.get(CollectionSnapshot, name)
            if snapshot is None:
                snapshot = CollectionSnapshot(name=name)
                db.session.add(snapshot)
            snapshot.records = copy.deepcopy(records)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(f"Could not save {name}: {exc}") from exc


class RemoteBackend(StoreBackend):
    """Reads and writes collections on another running instance.

    Talks to the snapshot endpoint GET/PUT /api/data/collections/<name>
    with a bearer token.
    """

    name = 'remote'

    def __init__(
        self,
        base_url: str,
        token: str = '',
        timeout: int = 25,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, name: str) -> str:
        return f'{self.base_url}/api/data/collections/{name}'

    def _headers(self) -> dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def load(self, name: str) -> Optional[list[dict]]:
        try:
            response = self.session.get(
                self._url(name), headers=self._headers(), timeout=self.timeout
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise PersistenceError(f"Could not load {name} from {self.base_url}: {exc}") from exc

        if not body.get('persisted'):
            return None
        return body.get('data') or []

    def save(self, name: str, records: list[dict]) -> None:
        try:
            response = self.session.put(
                self._url(name),
                headers=self._headers(),
                json={'data': records},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PersistenceError(f"Could not save {name} to {self.base_url}: {exc}") from exc


def create_backend(config) -> StoreBackend:
    """Build the backend selected by STORE_BACKEND.

    Args:
        config: Flask config mapping.

    Returns:
        A StoreBackend instance.

    Raises:
        ValueError: If STORE_BACKEND is unknown or remote is selected
                    without REMOTE_STORE_URL.
    """
    kind = (config.get('STORE_BACKEND') or 'file').lower()
    logger.info("Using %s store backend", kind)

    if kind == 'memory':
        return MemoryBackend()
    if kind == 'file':
        return JsonFileBackend(config['DATA_FILE'])
    if kind == 'database':
        return DatabaseBackend()
    if kind == 'remote':
        if not config.get('REMOTE_STORE_URL'):
            raise ValueError("REMOTE_STORE_URL must be set for the remote store backend")
        return RemoteBackend(
            config['REMOTE_STORE_URL'],
            token=config.get('REMOTE_STORE_TOKEN', ''),
            timeout=config.get('REMOTE_STORE_TIMEOUT', 25),
        )
    raise ValueError(
        f"Invalid STORE_BACKEND: {kind}. Must be one of: memory, file, database, remote"
    )
