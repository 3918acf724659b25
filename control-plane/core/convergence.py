# control-plane/core/convergence.py
"""
Convergence Engine - brings the live routing object in line with a descriptor
"""

import logging
from functools import partial
from typing import Optional, Tuple

from pydantic import ValidationError

from schemas.descriptor import ExposureDescriptor
from schemas.routing import RoutingObject, RoutingObjectSpec
from .conditions import set_invalid_merge_condition, remove_invalid_merge_condition
from .deadline import Deadline
from .errors import MergeError, StoreError
from .merge import merge_override
from .ownership import set_controller_reference, set_inherited_labels
from .routing_config import RoutingConfig
from .spec_builder import build_routing_spec

logger = logging.getLogger(__name__)


class ConvergenceEngine:
    """
    Convergence Engine for routing objects

    Responsibilities:
    1. Compute the desired spec (build + override merge)
    2. Record the InvalidMerge condition on the descriptor
    3. Upsert the routing object with spec, controller reference and labels
    """

    def __init__(self, routing_config: Optional[RoutingConfig] = None):
        self.routing_config = routing_config or RoutingConfig.from_settings()

    def desired_spec(self, descriptor: ExposureDescriptor) -> RoutingObjectSpec:
        """
        Build the spec and merge the descriptor override over it

        Raises:
            MergeError: After setting InvalidMerge on the descriptor
        """
        kind = self.routing_config.kind_for(descriptor.spec.exposure_mode)
        base = build_routing_spec(descriptor.spec, self.routing_config)

        try:
            spec = merge_override(base, descriptor.spec.override)
        except MergeError as e:
            logger.warning(
                f"Invalid {kind} override on {descriptor.metadata.namespace}/{descriptor.metadata.name}: {e}"
            )
            set_invalid_merge_condition(descriptor, kind, e)
            raise

        remove_invalid_merge_condition(descriptor)
        return spec

    def converge(
        self,
        store,
        descriptor: ExposureDescriptor,
        deadline: Optional[Deadline] = None
    ) -> Tuple[RoutingObject, bool]:
        """
        Converge the routing object of `descriptor`

        A merge failure aborts before the store is touched, so a previously
        converged object stays as it was.

        Args:
            store: ObjectStore holding routing objects
            descriptor: Descriptor with an exposure mode set
            deadline: Optional budget for the store calls

        Returns:
            Tuple of (live routing object, mutated)

        Raises:
            MergeError, OwnershipError, StoreError
        """
        mode = descriptor.spec.exposure_mode
        kind = self.routing_config.kind_for(mode)
        name = self.routing_config.object_name(descriptor.metadata.name, mode)
        namespace = descriptor.metadata.namespace

        spec = self.desired_spec(descriptor)

        document, mutated = store.upsert(
            kind,
            namespace,
            name,
            partial(self.apply_desired_state, descriptor=descriptor, spec=spec),
            deadline=deadline,
        )

        if mutated:
            logger.info(f"Converged {kind} {namespace}/{name}")
        else:
            logger.debug(f"{kind} {namespace}/{name} already up to date")

        return self._parse(mode, document), mutated

    def apply_desired_state(
        self,
        document: dict,
        descriptor: ExposureDescriptor,
        spec: RoutingObjectSpec
    ) -> dict:
        """
        Mutation applied to the fetched-or-new routing object document
        Status is carried over untouched
        """
        mode = descriptor.spec.exposure_mode
        document["apiVersion"] = self.routing_config.api_version_for(mode)
        document["spec"] = spec.to_document()

        obj = self._parse(mode, document)
        set_controller_reference(descriptor, obj, self.routing_config)
        set_inherited_labels(obj, descriptor.metadata.labels)

        result = obj.to_document()
        if "status" in document:
            result["status"] = document["status"]
        else:
            result.pop("status", None)
        return result

    def _parse(self, mode, document: dict) -> RoutingObject:
        model = self.routing_config.routing_object_class(mode)
        try:
            return model.model_validate(document)
        except ValidationError as e:
            name = (document.get("metadata") or {}).get("name", "")
            raise StoreError(f"Stored {model.__name__} {name} is malformed: {e}") from e
