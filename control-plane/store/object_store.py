# control-plane/store/object_store.py
"""
Object Store - typed object documents keyed by (kind, namespace, name)

The reconciler only sees the ObjectStore interface. SQLObjectStore is the
SQLAlchemy-backed implementation used by the API and the tests.
"""

import copy
import json
import logging
import uuid
from datetime import datetime
from typing import Callable, Optional, Tuple, List, Generator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session, sessionmaker

from core.deadline import Deadline
from core.errors import StoreError
from .models import StoredObject
from .session import SessionLocal

logger = logging.getLogger(__name__)

# Applied to the fetched-or-new document before it is persisted
Mutator = Callable[[dict], dict]


def canonical_json(document: dict) -> str:
    """Stable encoding used both for storage and change detection"""
    return json.dumps(document, sort_keys=True, separators=(",", ":"))


def new_document(kind: str, namespace: str, name: str) -> dict:
    """Skeleton for an object that does not exist yet"""
    return {
        "kind": kind,
        "metadata": {
            "name": name,
            "namespace": namespace,
            "uid": str(uuid.uuid4()),
        },
    }


class ObjectStore:
    """
    Abstract store of typed objects

    Implementations raise StoreError on I/O failure and check the optional
    deadline before touching the backend.
    """

    def get(
        self,
        kind: str,
        namespace: str,
        name: str,
        deadline: Optional[Deadline] = None
    ) -> Tuple[Optional[dict], bool]:
        """
        Fetch an object document

        Returns:
            Tuple of (document or None, found)
        """
        raise NotImplementedError

    def upsert(
        self,
        kind: str,
        namespace: str,
        name: str,
        mutate: Mutator,
        deadline: Optional[Deadline] = None
    ) -> Tuple[dict, bool]:
        """
        Create or update an object as one logical operation

        `mutate` receives a copy of the live document (or a new skeleton)
        and returns the desired document. Nothing is written when the
        result equals the live document.

        Returns:
            Tuple of (persisted document, mutated)
        """
        raise NotImplementedError

    def delete(self, kind: str, namespace: str, name: str) -> bool:
        """Delete an object, returns False if it did not exist"""
        raise NotImplementedError

    def list(self, kind: str, namespace: Optional[str] = None) -> List[dict]:
        """List object documents of a kind, optionally within one namespace"""
        raise NotImplementedError


class SQLObjectStore(ObjectStore):
    """
    ObjectStore backed by the `objects` table

    Each call runs in its own session. The unique (kind, namespace, name)
    constraint guarantees a single object per identity; an insert that loses
    a race against a concurrent insert is retried once as an update.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    def get(self, kind, namespace, name, deadline=None):
        if deadline is not None:
            deadline.check(f"get {kind} {namespace}/{name}")

        db = self.session_factory()
        try:
            row = self._find(db, kind, namespace, name)
            if row is None:
                return None, False
            return row.document(), True
        except SQLAlchemyError as e:
            logger.error(f"Failed to get {kind} {namespace}/{name}: {e}")
            raise StoreError(f"Failed to get {kind} {namespace}/{name}: {e}") from e
        finally:
            db.close()

    def upsert(self, kind, namespace, name, mutate, deadline=None):
        if deadline is not None:
            deadline.check(f"upsert {kind} {namespace}/{name}")

        try:
            try:
                return self._upsert_once(kind, namespace, name, mutate)
            except IntegrityError:
                logger.info(f"Concurrent create of {kind} {namespace}/{name}, retrying as update")
                return self._upsert_once(kind, namespace, name, mutate)
        except SQLAlchemyError as e:
            logger.error(f"Failed to upsert {kind} {namespace}/{name}: {e}")
            raise StoreError(f"Failed to upsert {kind} {namespace}/{name}: {e}") from e

    def delete(self, kind, namespace, name):
        db = self.session_factory()
        try:
            row = self._find(db, kind, namespace, name, for_update=True)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            logger.info(f"Deleted {kind} {namespace}/{name}")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(f"Failed to delete {kind} {namespace}/{name}: {e}") from e
        finally:
            db.close()

    def list(self, kind, namespace=None):
        db = self.session_factory()
        try:
            query = db.query(StoredObject).filter(StoredObject.kind == kind)
            if namespace:
                query = query.filter(StoredObject.namespace == namespace)
            return [row.document() for row in query.order_by(StoredObject.namespace, StoredObject.name).all()]
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list {kind}: {e}") from e
        finally:
            db.close()

    def get_resource_version(self, kind: str, namespace: str, name: str) -> Optional[int]:
        """Current write counter of an object, None if absent"""
        db = self.session_factory()
        try:
            row = self._find(db, kind, namespace, name)
            return row.resource_version if row else None
        finally:
            db.close()

    # === Internal ===

    @staticmethod
    def _query(db: Session, kind: str, namespace: str, name: str, for_update: bool = False) -> Query:
        query = db.query(StoredObject).filter(
            StoredObject.kind == kind,
            StoredObject.namespace == namespace,
            StoredObject.name == name
        )
        # Row lock only for read-modify-write
        return query.with_for_update() if for_update else query

    def _find(
        self,
        db: Session,
        kind: str,
        namespace: str,
        name: str,
        for_update: bool = False
    ) -> Optional[StoredObject]:
        return self._query(db, kind, namespace, name, for_update).first()

    def _upsert_once(self, kind: str, namespace: str, name: str, mutate: Mutator) -> Tuple[dict, bool]:
        db = self.session_factory()
        try:
            row = self._find(db, kind, namespace, name, for_update=True)
            current = row.document() if row is not None else new_document(kind, namespace, name)

            desired = mutate(copy.deepcopy(current))

            # Identity is fixed by the key, whatever the mutator did
            desired["kind"] = kind
            metadata = desired.setdefault("metadata", {})
            metadata["name"] = name
            metadata["namespace"] = namespace

            body = canonical_json(desired)
            if row is not None and body == row.body:
                return current, False

            if row is None:
                db.add(StoredObject(kind=kind, namespace=namespace, name=name, body=body))
                logger.info(f"Created {kind} {namespace}/{name}")
            else:
                row.body = body
                row.resource_version += 1
                row.updated_at = datetime.utcnow()
                logger.info(f"Updated {kind} {namespace}/{name} (rv={row.resource_version})")

            db.commit()
            return desired, True

        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def get_object_store() -> Generator[ObjectStore, None, None]:
    """
    Object store dependency for FastAPI
    Usage: store: ObjectStore = Depends(get_object_store)
    """
    yield SQLObjectStore(SessionLocal)
