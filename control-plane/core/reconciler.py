# control-plane/core/reconciler.py
"""
Exposure Reconciler - one reconcile pass of a descriptor

The caller (watch loop, API) invokes reconcile() until the stage is
terminal; nothing here retries or locks.
"""

import logging
from typing import Optional

from schemas.descriptor import ExposureDescriptor
from schemas.routing import RoutingObject
from .convergence import ConvergenceEngine
from .deadline import Deadline
from .errors import OperatorError, NotReadyError, IncompleteEndpointError
from .resolver import EndpointResolver
from .routing_config import RoutingConfig
from .stage import report_stage, StageResult

logger = logging.getLogger(__name__)


def check_readiness(routing_object: RoutingObject, admin_url: str) -> Optional[OperatorError]:
    """
    Readiness policy for the preferred access path

    An empty load balancer list means the external controller has not
    caught up yet; a populated list without a usable host is a
    configuration problem.
    """
    name = f"{routing_object.kind} {routing_object.metadata.namespace}/{routing_object.metadata.name}"

    if not routing_object.load_balancer_entries:
        return NotReadyError(f"{name} is not ready yet")

    if not admin_url:
        return IncompleteEndpointError(f"{name} spec is incomplete")

    return None


class ExposureReconciler:
    """
    Reconciler for the external endpoint of a descriptor

    Flow:
    1. Converge the routing object (Ingress or HTTPRoute)
    2. When this exposure is the preferred access path, resolve the admin URL
    3. Report Success / InProgress / Failed
    """

    def __init__(
        self,
        store,
        routing_config: Optional[RoutingConfig] = None,
        engine: Optional[ConvergenceEngine] = None,
        resolver: Optional[EndpointResolver] = None
    ):
        self.store = store
        self.routing_config = routing_config or RoutingConfig.from_settings()
        self.engine = engine or ConvergenceEngine(self.routing_config)
        self.resolver = resolver or EndpointResolver(self.routing_config)

    def reconcile(self, descriptor: ExposureDescriptor, deadline: Optional[Deadline] = None) -> StageResult:
        """
        Run one reconcile pass

        Writes descriptor.status (admin_url, InvalidMerge condition).

        Returns:
            Tuple of (OperatorStageStatus, error or None)
        """
        ident = f"{descriptor.metadata.namespace}/{descriptor.metadata.name}"
        mode = descriptor.spec.exposure_mode

        if mode is None:
            logger.debug(f"No exposure requested for {ident}")
            return report_stage(None)

        logger.info(f"Reconciling {mode.value} exposure for {ident}")

        try:
            routing_object, _ = self.engine.converge(self.store, descriptor, deadline)
        except OperatorError as e:
            logger.error(f"Convergence failed for {ident}: {e}")
            return report_stage(e)

        if not descriptor.spec.prefer_external_access:
            return report_stage(None)

        try:
            admin_url = self.resolver.resolve(self.store, routing_object, mode, deadline)
        except OperatorError as e:
            logger.error(f"Endpoint resolution failed for {ident}: {e}")
            return report_stage(e)

        problem = check_readiness(routing_object, admin_url)
        if problem is not None:
            logger.warning(f"Admin URL for {ident} not published: {problem}")
            return report_stage(problem)

        if descriptor.status.admin_url != admin_url:
            logger.info(f"Admin URL for {ident}: {admin_url}")
        descriptor.status.admin_url = admin_url

        return report_stage(None)
