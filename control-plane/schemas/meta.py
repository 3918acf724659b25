# control-plane/schemas/meta.py
"""
Object metadata shared by descriptors and routing objects
"""

from pydantic import Field, ConfigDict
from typing import Optional, List, Dict

from .base import ResourceModel


class OwnerReference(ResourceModel):
    """Reference from an owned object back to its owner"""
    api_version: str
    kind: str
    name: str
    uid: str
    controller: Optional[bool] = None
    block_owner_deletion: Optional[bool] = None


class ObjectMeta(ResourceModel):
    """
    Identity and bookkeeping for a stored object
    Unknown keys (finalizers, managedFields...) are kept as-is
    """
    name: str = Field(..., min_length=1, max_length=253)
    namespace: str = Field(default="default", min_length=1, max_length=63)
    uid: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    owner_references: List[OwnerReference] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")
