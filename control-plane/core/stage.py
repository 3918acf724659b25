# control-plane/core/stage.py
"""
Stage Reporter - maps a reconcile outcome to a stage status
"""

from typing import Optional, Tuple

from schemas.stage import OperatorStageStatus
from .errors import NotReadyError

StageResult = Tuple[OperatorStageStatus, Optional[Exception]]


def report_stage(error: Optional[Exception] = None) -> StageResult:
    """
    No error -> Success
    NotReadyError -> InProgress, error kept as a message for the caller's log
    Anything else -> Failed
    """
    if error is None:
        return OperatorStageStatus.SUCCESS, None
    if isinstance(error, NotReadyError):
        return OperatorStageStatus.IN_PROGRESS, error
    return OperatorStageStatus.FAILED, error
