# control-plane/schemas/__init__.py
"""
Pydantic Schemas for the External Endpoint Control Plane
Organized by domain: descriptors, routing objects, stages
"""

from .base import ResourceModel, BaseResponse, ErrorResponse, HealthResponse
from .meta import ObjectMeta, OwnerReference
from .descriptor import (
    ExposureMode,
    ServiceReference,
    DesiredState,
    Condition,
    DescriptorStatus,
    ExposureDescriptor,
    DescriptorApply,
)
from .routing import (
    BackendPort,
    BackendReference,
    PathMatch,
    RoutingRule,
    RoutingObjectSpec,
    IngressSpec,
    HTTPRouteSpec,
    ParentReference,
    LoadBalancerIngress,
    RoutingObject,
    Ingress,
    HTTPRoute,
    Gateway,
    GatewayAddress,
)
from .stage import OperatorStageStatus, ObjectIdentity, ReconcileResponse

__all__ = [
    # Base
    "ResourceModel",
    "BaseResponse",
    "ErrorResponse",
    "HealthResponse",
    # Metadata
    "ObjectMeta",
    "OwnerReference",
    # Descriptor
    "ExposureMode",
    "ServiceReference",
    "DesiredState",
    "Condition",
    "DescriptorStatus",
    "ExposureDescriptor",
    "DescriptorApply",
    # Routing
    "BackendPort",
    "BackendReference",
    "PathMatch",
    "RoutingRule",
    "RoutingObjectSpec",
    "IngressSpec",
    "HTTPRouteSpec",
    "ParentReference",
    "LoadBalancerIngress",
    "RoutingObject",
    "Ingress",
    "HTTPRoute",
    "Gateway",
    "GatewayAddress",
    # Stage
    "OperatorStageStatus",
    "ObjectIdentity",
    "ReconcileResponse",
]
