"""Shared fixtures: in-memory object store and descriptor factory."""

from typing import Any, Dict, Optional, Union

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.errors import StoreError
from core.routing_config import RoutingConfig
from schemas.descriptor import DesiredState, ExposureDescriptor, ExposureMode, ServiceReference
from schemas.meta import ObjectMeta
from store.models import Base
from store.object_store import ObjectStore, SQLObjectStore


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def engine(db_engine):
    return db_engine


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def store(session_factory) -> SQLObjectStore:
    return SQLObjectStore(session_factory)


@pytest.fixture
def routing_config() -> RoutingConfig:
    return RoutingConfig()


@pytest.fixture
def make_descriptor():
    def factory(
        mode: Optional[ExposureMode] = ExposureMode.INGRESS,
        port: Union[int, str] = 3000,
        override: Any = None,
        prefer: bool = True,
        labels: Optional[Dict[str, str]] = None,
        uid: Optional[str] = "0b6c4f0e-descriptor-uid",
        name: str = "grafana",
        namespace: str = "monitoring",
    ) -> ExposureDescriptor:
        return ExposureDescriptor(
            metadata=ObjectMeta(
                name=name,
                namespace=namespace,
                uid=uid,
                labels=labels or {},
            ),
            spec=DesiredState(
                service=ServiceReference(name=f"{name}-service", namespace=namespace),
                target_port=port,
                exposure_mode=mode,
                override=override,
                prefer_external_access=prefer,
            ),
        )

    return factory


@pytest.fixture
def set_status(store):
    """Publish status on a stored object, the way an infrastructure controller would."""

    def publish(kind: str, namespace: str, name: str, status: Dict[str, Any]) -> None:
        def replace_status(document: dict) -> dict:
            document["status"] = status
            return document

        store.upsert(kind, namespace, name, replace_status)

    return publish


class FailingStore(ObjectStore):
    """Store whose every call fails like an unreachable API server."""

    def __init__(self, fail_get: bool = True, fail_upsert: bool = True, inner: Optional[ObjectStore] = None):
        self.fail_get = fail_get
        self.fail_upsert = fail_upsert
        self.inner = inner

    def get(self, kind, namespace, name, deadline=None):
        if self.fail_get:
            raise StoreError(f"connection refused while getting {kind} {namespace}/{name}")
        return self.inner.get(kind, namespace, name, deadline=deadline)

    def upsert(self, kind, namespace, name, mutate, deadline=None):
        if self.fail_upsert:
            raise StoreError(f"connection refused while writing {kind} {namespace}/{name}")
        return self.inner.upsert(kind, namespace, name, mutate, deadline=deadline)


@pytest.fixture
def failing_store_cls():
    return FailingStore
