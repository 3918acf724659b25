# control-plane/core/__init__.py
"""
Core reconcile logic
"""

from .errors import (
    OperatorError,
    MergeError,
    StoreError,
    OwnershipError,
    IncompleteEndpointError,
    NotReadyError,
)
from .deadline import Deadline
from .routing_config import RoutingConfig, ROUTING_OBJECT_MODELS
from .spec_builder import build_routing_spec, resolve_backend_port
from .merge import merge_override, deep_merge
from .conditions import INVALID_MERGE, find_condition, set_condition, remove_condition
from .ownership import set_controller_reference, set_inherited_labels
from .convergence import ConvergenceEngine
from .resolver import EndpointResolver, first_match
from .stage import report_stage
from .reconciler import ExposureReconciler, check_readiness

__all__ = [
    # Errors
    "OperatorError",
    "MergeError",
    "StoreError",
    "OwnershipError",
    "IncompleteEndpointError",
    "NotReadyError",
    # Context
    "Deadline",
    "RoutingConfig",
    "ROUTING_OBJECT_MODELS",
    # Spec Builder
    "build_routing_spec",
    "resolve_backend_port",
    # Merge
    "merge_override",
    "deep_merge",
    # Conditions
    "INVALID_MERGE",
    "find_condition",
    "set_condition",
    "remove_condition",
    # Ownership
    "set_controller_reference",
    "set_inherited_labels",
    # Engine
    "ConvergenceEngine",
    "EndpointResolver",
    "first_match",
    "report_stage",
    "ExposureReconciler",
    "check_readiness",
]
