# control-plane/core/spec_builder.py
"""
Spec Builder - computes the routing spec of a descriptor
Pure functions, no store access
"""

from typing import Union

from schemas.descriptor import DesiredState, ExposureMode
from schemas.routing import (
    BackendPort,
    BackendReference,
    PathMatch,
    RoutingRule,
    RoutingObjectSpec,
    IngressSpec,
    HTTPRouteSpec,
)
from .routing_config import RoutingConfig


def resolve_backend_port(target_port: Union[int, str]) -> BackendPort:
    """
    Numeric port when the target port is a positive number, named port otherwise
    DesiredState rejects ports that are neither at construction
    """
    if isinstance(target_port, int) and target_port > 0:
        return BackendPort(number=target_port)
    return BackendPort(name=str(target_port))


def build_routing_spec(desired: DesiredState, routing_config: RoutingConfig) -> RoutingObjectSpec:
    """
    Build the routing spec: a single rule sending the default path prefix
    to the target service.
    """
    rule = RoutingRule(
        matches=[
            PathMatch(
                type=routing_config.path_match_type,
                value=routing_config.default_path,
            )
        ],
        backend_refs=[
            BackendReference(
                name=desired.service.name,
                namespace=desired.service.namespace,
                port=resolve_backend_port(desired.target_port),
            )
        ],
    )

    if desired.exposure_mode == ExposureMode.ROUTE:
        return HTTPRouteSpec(rules=[rule])
    return IngressSpec(rules=[rule])
