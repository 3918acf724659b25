# control-plane/store/models.py
"""
SQLAlchemy Database Models for the object store
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text,
    Index, UniqueConstraint
)
from sqlalchemy.orm import declarative_base
from datetime import datetime
import json

Base = declarative_base()


class StoredObject(Base):
    """
    Objects table - one row per (kind, namespace, name)
    The object document is kept as canonical JSON
    """
    __tablename__ = "objects"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Identity
    kind = Column(String(63), nullable=False,
                  comment="Object kind: Ingress, HTTPRoute, Gateway...")
    namespace = Column(String(63), nullable=False,
                       comment="Object namespace")
    name = Column(String(253), nullable=False,
                  comment="Object name (deterministic for routing objects)")

    # Document
    body = Column(Text, nullable=False,
                  comment="Canonical JSON document (sorted keys)")
    resource_version = Column(Integer, default=1, nullable=False,
                              comment="Incremented on every write")

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Identity is the idempotency key of upserts
    __table_args__ = (
        UniqueConstraint('kind', 'namespace', 'name', name='uq_objects_identity'),
        Index('ix_objects_kind_namespace', 'kind', 'namespace'),
    )

    def __repr__(self):
        return f"<StoredObject(kind={self.kind}, namespace={self.namespace}, name={self.name}, rv={self.resource_version})>"

    def document(self) -> dict:
        """Decoded object document"""
        return json.loads(self.body)
