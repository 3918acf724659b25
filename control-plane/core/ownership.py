# control-plane/core/ownership.py
"""
Ownership and label inheritance for routing objects
Plain mutation steps applied after the spec is built
"""

import logging
from typing import Dict

from schemas.descriptor import ExposureDescriptor
from schemas.meta import OwnerReference
from schemas.routing import RoutingObject
from .errors import OwnershipError
from .routing_config import RoutingConfig

logger = logging.getLogger(__name__)


def controller_reference(owner: ExposureDescriptor, routing_config: RoutingConfig) -> OwnerReference:
    """Owner reference marking the descriptor as the managing controller"""
    return OwnerReference(
        api_version=routing_config.owner_api_version,
        kind=routing_config.owner_kind,
        name=owner.metadata.name,
        uid=owner.metadata.uid or "",
        controller=True,
        block_owner_deletion=True,
    )


def set_controller_reference(
    owner: ExposureDescriptor,
    obj: RoutingObject,
    routing_config: RoutingConfig
) -> None:
    """
    Set the descriptor as controller owner of `obj`

    Deleting the descriptor then cascades to the routing object.

    Raises:
        OwnershipError: If the owner has no uid, lives in another namespace,
            or another owner already controls the object
    """
    if not owner.metadata.uid:
        raise OwnershipError(
            f"Owner {owner.metadata.namespace}/{owner.metadata.name} has no uid"
        )

    if owner.metadata.namespace != obj.metadata.namespace:
        raise OwnershipError(
            f"Cross-namespace owner references are disallowed: owner namespace "
            f"{owner.metadata.namespace}, object namespace {obj.metadata.namespace}"
        )

    ref = controller_reference(owner, routing_config)
    references = list(obj.metadata.owner_references)

    for existing in references:
        if existing.controller and existing.uid != ref.uid:
            raise OwnershipError(
                f"{obj.kind} {obj.metadata.namespace}/{obj.metadata.name} is already "
                f"controlled by {existing.kind} {existing.name}"
            )

    for index, existing in enumerate(references):
        if existing.uid == ref.uid:
            references[index] = ref
            break
    else:
        references.append(ref)

    obj.metadata.owner_references = references


def set_inherited_labels(obj: RoutingObject, labels: Dict[str, str]) -> None:
    """Copy descriptor labels onto the object; other labels stay"""
    if not labels:
        return
    obj.metadata.labels = {**obj.metadata.labels, **labels}
