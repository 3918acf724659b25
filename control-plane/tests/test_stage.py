"""Tests for core.stage.report_stage."""

import pytest

from core.errors import IncompleteEndpointError, MergeError, NotReadyError, OwnershipError, StoreError
from core.stage import report_stage
from schemas.stage import OperatorStageStatus


def test_no_error_is_success() -> None:
    assert report_stage(None) == (OperatorStageStatus.SUCCESS, None)
    assert report_stage() == (OperatorStageStatus.SUCCESS, None)


def test_not_ready_is_in_progress() -> None:
    err = NotReadyError("Ingress default/web is not ready yet")
    stage, returned = report_stage(err)

    assert stage == OperatorStageStatus.IN_PROGRESS
    assert returned is err


@pytest.mark.parametrize("err", [
    MergeError("bad override"),
    StoreError("connection refused"),
    OwnershipError("already controlled"),
    IncompleteEndpointError("spec is incomplete"),
    RuntimeError("unexpected"),
])
def test_other_errors_fail(err) -> None:
    stage, returned = report_stage(err)

    assert stage == OperatorStageStatus.FAILED
    assert returned is err


def test_stage_values() -> None:
    assert OperatorStageStatus.SUCCESS.value == "success"
    assert OperatorStageStatus.IN_PROGRESS.value == "in_progress"
    assert OperatorStageStatus.FAILED.value == "failed"
