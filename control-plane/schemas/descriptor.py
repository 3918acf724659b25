# control-plane/schemas/descriptor.py
"""
Exposure descriptor schemas
The user-authored declaration of what should be exposed and how
"""

from pydantic import Field, field_validator, ConfigDict
from typing import Optional, List, Dict, Union, Any
from datetime import datetime
from enum import Enum

from .base import ResourceModel
from .meta import ObjectMeta


class ExposureMode(str, Enum):
    """Kind of routing object used to expose the service"""
    INGRESS = "ingress"  # networking.k8s.io Ingress
    ROUTE = "route"      # gateway.networking.k8s.io HTTPRoute


class ServiceReference(ResourceModel):
    """Service that receives the routed traffic"""
    name: str = Field(..., min_length=1, max_length=63)
    namespace: str = Field(..., min_length=1, max_length=63)


class DesiredState(ResourceModel):
    """
    Immutable desired state of the exposure

    target_port is either a positive port number or a non-empty port name.
    override is an untyped partial routing spec merged over the computed one.
    """
    service: ServiceReference
    target_port: Union[int, str] = Field(
        ...,
        description="Service port number or name",
        examples=[3000, "http"]
    )
    exposure_mode: Optional[ExposureMode] = Field(
        None,
        description="Routing object kind; unset means no routing object is managed"
    )
    override: Optional[Any] = Field(
        None,
        description="Partial routing spec merged over the computed spec",
        examples=[{"ingressClassName": "nginx"}]
    )
    prefer_external_access: bool = Field(
        default=False,
        description="Whether this exposure is the preferred admin access path"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "service": {"name": "grafana-service", "namespace": "monitoring"},
                "targetPort": 3000,
                "exposureMode": "route",
                "override": {"parentRefs": [{"name": "public", "namespace": "gateways"}]},
                "preferExternalAccess": True
            }
        }
    )

    @field_validator('target_port')
    @classmethod
    def validate_target_port(cls, v: Union[int, str]) -> Union[int, str]:
        """Port must be a positive number or a non-empty name"""
        if isinstance(v, int):
            if v <= 0:
                raise ValueError('Target port number must be positive')
            return v
        if not v.strip():
            raise ValueError('Target port name must not be empty')
        return v


class Condition(ResourceModel):
    """Status condition recorded on the descriptor"""
    type: str
    status: str  # "True", "False", "Unknown"
    reason: str = ""
    message: str = ""
    last_transition_time: datetime = Field(default_factory=datetime.utcnow)


class DescriptorStatus(ResourceModel):
    """Status fields written back by the reconciler"""
    admin_url: str = ""
    conditions: List[Condition] = Field(default_factory=list)


class ExposureDescriptor(ResourceModel):
    """
    Desired-state descriptor (custom resource)
    metadata carries the owner identity and the labels inherited by routing objects
    """
    metadata: ObjectMeta
    spec: DesiredState
    status: DescriptorStatus = Field(default_factory=DescriptorStatus)


class DescriptorApply(ResourceModel):
    """
    Request body for creating or replacing a descriptor
    Identity comes from the URL, uid and status are kept by the store
    """
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    spec: DesiredState
