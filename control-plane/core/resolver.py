# control-plane/core/resolver.py
"""
Endpoint Resolver - derives the admin URL of a routing object

Host candidates, in order (first non-empty wins):
1. Explicit hostname on the route (first of spec.hostnames)
2. First non-empty address of the route's parent Gateway
3. Load balancer status: first hostname, else first IP

Nothing is cached: status is eventually consistent and re-read every call.
"""

import logging
from functools import partial
from typing import Callable, Iterable, List, Optional

from pydantic import ValidationError

from schemas.descriptor import ExposureMode
from schemas.routing import RoutingObject, LoadBalancerIngress, Gateway
from .deadline import Deadline
from .errors import StoreError
from .routing_config import RoutingConfig

logger = logging.getLogger(__name__)

Candidate = Callable[[], Optional[str]]


def first_match(candidates: Iterable[Candidate]) -> str:
    """Evaluate candidates lazily, return the first non-empty value or ''"""
    for candidate in candidates:
        value = candidate()
        if value:
            return value
    return ""


def first_load_balancer_hostname(entries: List[LoadBalancerIngress]) -> Optional[str]:
    return next((entry.hostname for entry in entries if entry.hostname), None)


def first_load_balancer_ip(entries: List[LoadBalancerIngress]) -> Optional[str]:
    return next((entry.ip for entry in entries if entry.ip), None)


class EndpointResolver:
    """Resolves zero or one externally reachable URL for a routing object"""

    def __init__(self, routing_config: Optional[RoutingConfig] = None):
        self.routing_config = routing_config or RoutingConfig.from_settings()

    def resolve(
        self,
        store,
        routing_object: RoutingObject,
        exposure_mode: ExposureMode,
        deadline: Optional[Deadline] = None
    ) -> str:
        """
        Resolve the admin URL

        Returns:
            "<protocol>://<host>", or "" when no host is known yet

        Raises:
            StoreError: If the parent Gateway cannot be fetched
        """
        host = first_match([
            partial(self.explicit_hostname, routing_object, exposure_mode),
            partial(self.parent_address, store, routing_object, exposure_mode, deadline),
            partial(self.load_balancer_host, routing_object),
        ])

        # No host means no URL, never a bare "http://"
        if not host:
            return ""

        return f"{self.routing_config.admin_url_protocol}://{host}"

    @staticmethod
    def explicit_hostname(routing_object: RoutingObject, exposure_mode: ExposureMode) -> Optional[str]:
        """First declared hostname; Ingress objects carry none"""
        if exposure_mode != ExposureMode.ROUTE or routing_object.spec is None:
            return None
        hostnames = getattr(routing_object.spec, "hostnames", None) or []
        return hostnames[0] if hostnames else None

    def parent_address(
        self,
        store,
        routing_object: RoutingObject,
        exposure_mode: ExposureMode,
        deadline: Optional[Deadline] = None
    ) -> Optional[str]:
        """First non-empty status address of the first parent Gateway"""
        if exposure_mode != ExposureMode.ROUTE or routing_object.spec is None:
            return None

        parent_refs = getattr(routing_object.spec, "parent_refs", None) or []
        if not parent_refs:
            return None

        ref = parent_refs[0]
        namespace = ref.namespace or routing_object.metadata.namespace
        kind = self.routing_config.gateway_kind

        document, found = store.get(kind, namespace, ref.name, deadline=deadline)
        if not found:
            logger.info(f"{kind} {namespace}/{ref.name} not found yet")
            return None

        try:
            gateway = Gateway.model_validate(document)
        except ValidationError as e:
            raise StoreError(f"Stored {kind} {namespace}/{ref.name} is malformed: {e}") from e

        return next((address.value for address in gateway.status.addresses if address.value), None)

    @staticmethod
    def load_balancer_host(routing_object: RoutingObject) -> Optional[str]:
        """A hostname anywhere in the list beats an earlier IP-only entry"""
        entries = routing_object.load_balancer_entries
        return first_match([
            partial(first_load_balancer_hostname, entries),
            partial(first_load_balancer_ip, entries),
        ]) or None
