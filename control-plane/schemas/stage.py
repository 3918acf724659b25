# control-plane/schemas/stage.py
"""
Reconcile stage schemas
"""

from pydantic import Field, ConfigDict
from typing import Optional
from enum import Enum

from .base import ResourceModel
from .descriptor import DescriptorStatus


class OperatorStageStatus(str, Enum):
    """Outcome of one reconcile, consumed by the retry scheduler"""
    SUCCESS = "success"          # Converged, nothing to retry
    IN_PROGRESS = "in_progress"  # Waiting on external infrastructure
    FAILED = "failed"            # Error, retry with backoff


class ObjectIdentity(ResourceModel):
    """Kind, namespace and name of a stored object"""
    kind: str
    namespace: str
    name: str


class ReconcileResponse(ResourceModel):
    """Result of a reconcile triggered through the API"""
    stage: OperatorStageStatus
    message: Optional[str] = Field(None, description="Error or not-ready message")
    status: DescriptorStatus
    routing_object: Optional[ObjectIdentity] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "stage": "success",
                "message": None,
                "status": {"adminUrl": "http://grafana.example.com", "conditions": []},
                "routingObject": {"kind": "HTTPRoute", "namespace": "monitoring", "name": "grafana-route"}
            }
        }
    )
