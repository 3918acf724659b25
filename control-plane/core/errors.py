# control-plane/core/errors.py
"""
Reconcile error kinds
"""


class OperatorError(Exception):
    """Base class for every error surfaced by a reconcile"""


class MergeError(OperatorError):
    """Override fragment is incompatible with the routing spec schema"""


class StoreError(OperatorError):
    """Object store get/upsert failed (transient, retry)"""


class OwnershipError(OperatorError):
    """Controller reference could not be set on the routing object"""


class IncompleteEndpointError(OperatorError):
    """Load balancer status is populated but yields no usable host"""


class NotReadyError(OperatorError):
    """
    External infrastructure has not populated the routing object status yet
    Reported as InProgress, never as a failure
    """
