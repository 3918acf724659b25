# control-plane/core/conditions.py
"""
Descriptor status conditions
"""

from typing import List, Optional

from schemas.descriptor import Condition, DescriptorStatus, ExposureDescriptor

INVALID_MERGE = "InvalidMerge"


def find_condition(conditions: List[Condition], condition_type: str) -> Optional[Condition]:
    for condition in conditions:
        if condition.type == condition_type:
            return condition
    return None


def set_condition(status: DescriptorStatus, condition: Condition) -> None:
    """
    Add or update a condition by type
    The transition time only moves when the condition status changes
    """
    existing = find_condition(status.conditions, condition.type)
    if existing is None:
        status.conditions.append(condition)
        return

    if existing.status != condition.status:
        existing.status = condition.status
        existing.last_transition_time = condition.last_transition_time
    existing.reason = condition.reason
    existing.message = condition.message


def remove_condition(status: DescriptorStatus, condition_type: str) -> bool:
    """Drop a condition by type, returns True if one was removed"""
    remaining = [c for c in status.conditions if c.type != condition_type]
    removed = len(remaining) != len(status.conditions)
    status.conditions = remaining
    return removed


def set_invalid_merge_condition(descriptor: ExposureDescriptor, kind: str, err: Exception) -> None:
    set_condition(
        descriptor.status,
        Condition(
            type=INVALID_MERGE,
            status="True",
            reason=f"Invalid{kind}Override",
            message=str(err),
        ),
    )


def remove_invalid_merge_condition(descriptor: ExposureDescriptor) -> bool:
    return remove_condition(descriptor.status, INVALID_MERGE)
