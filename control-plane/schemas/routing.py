# control-plane/schemas/routing.py
"""
Routing object schemas (Ingress, HTTPRoute) and the Gateway parent object

Spec models forbid unknown fields: they are the schema an override
fragment is validated against. Metadata and status keep unknown fields
since they are written by other controllers.
"""

from pydantic import Field, ConfigDict, model_validator
from typing import Optional, List, Dict, Any

from .base import ResourceModel
from .meta import ObjectMeta


# === Spec ===

class BackendPort(ResourceModel):
    """Service port, by number or by name (never both)"""
    number: Optional[int] = Field(None, ge=1, le=65535)
    name: Optional[str] = Field(None, min_length=1)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode='after')
    def check_single_form(self) -> "BackendPort":
        if (self.number is None) == (self.name is None):
            raise ValueError('Backend port must set exactly one of number or name')
        return self


class BackendReference(ResourceModel):
    """Service receiving the traffic of a rule"""
    name: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1)
    port: BackendPort

    model_config = ConfigDict(extra="forbid")


class PathMatch(ResourceModel):
    """HTTP path match"""
    type: str = "PathPrefix"
    value: str = "/"

    model_config = ConfigDict(extra="forbid")


class RoutingRule(ResourceModel):
    """A path match routed to exactly one backend"""
    matches: List[PathMatch] = Field(..., min_length=1)
    backend_refs: List[BackendReference] = Field(..., min_length=1, max_length=1)

    model_config = ConfigDict(extra="forbid")


class RoutingObjectSpec(ResourceModel):
    """Spec fields common to every routing object kind"""
    rules: List[RoutingRule] = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")


class IngressSpec(RoutingObjectSpec):
    """Ingress-style spec"""
    ingress_class_name: Optional[str] = None


class ParentReference(ResourceModel):
    """Reference to the Gateway a route attaches to"""
    name: str = Field(..., min_length=1)
    namespace: Optional[str] = None
    section_name: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class HTTPRouteSpec(RoutingObjectSpec):
    """Route-style spec"""
    hostnames: List[str] = Field(default_factory=list)
    parent_refs: List[ParentReference] = Field(default_factory=list)


# === Status (written by external infrastructure) ===

class LoadBalancerIngress(ResourceModel):
    """One load-balancer entry point"""
    ip: Optional[str] = None
    hostname: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class LoadBalancerStatus(ResourceModel):
    ingress: List[LoadBalancerIngress] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class RoutingObjectStatus(ResourceModel):
    load_balancer: LoadBalancerStatus = Field(default_factory=LoadBalancerStatus)

    model_config = ConfigDict(extra="allow")


# === Objects ===

class RoutingObject(ResourceModel):
    """
    Live routing object
    spec is owned by the reconciler, status is read-only input
    """
    api_version: str
    kind: str
    metadata: ObjectMeta
    spec: Optional[RoutingObjectSpec] = None
    status: RoutingObjectStatus = Field(default_factory=RoutingObjectStatus)

    model_config = ConfigDict(extra="allow")

    @property
    def load_balancer_entries(self) -> List[LoadBalancerIngress]:
        return self.status.load_balancer.ingress


class Ingress(RoutingObject):
    spec: Optional[IngressSpec] = None


class HTTPRoute(RoutingObject):
    spec: Optional[HTTPRouteSpec] = None


class GatewayAddress(ResourceModel):
    type: Optional[str] = None
    value: str = ""

    model_config = ConfigDict(extra="allow")


class GatewayStatus(ResourceModel):
    addresses: List[GatewayAddress] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class Gateway(ResourceModel):
    """
    Parent object of an HTTPRoute
    Managed elsewhere; only its status addresses are read
    """
    api_version: str = "gateway.networking.k8s.io/v1"
    kind: str = "Gateway"
    metadata: ObjectMeta
    spec: Optional[Dict[str, Any]] = None
    status: GatewayStatus = Field(default_factory=GatewayStatus)

    model_config = ConfigDict(extra="allow")
