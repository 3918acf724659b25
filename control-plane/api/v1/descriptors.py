# control-plane/api/v1/descriptors.py
"""
Descriptor API Endpoints
Apply exposure descriptors and trigger reconciles
"""

from fastapi import APIRouter, Depends, HTTPException, status
import logging

from schemas.base import ErrorResponse
from schemas.descriptor import ExposureDescriptor, DescriptorApply, DescriptorStatus
from schemas.meta import ObjectMeta
from schemas.stage import ReconcileResponse, ObjectIdentity
from store.object_store import ObjectStore, get_object_store
from core.deadline import Deadline
from core.errors import StoreError
from core.reconciler import ExposureReconciler
from core.routing_config import RoutingConfig
from config import settings
from .auth import verify_admin_token

logger = logging.getLogger(__name__)

router = APIRouter()


def _descriptor_kind() -> str:
    return settings.OWNER_KIND


def _store_unavailable(e: StoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={"error": str(e), "error_code": "STORE_UNAVAILABLE"}
    )


def _load_descriptor(store: ObjectStore, namespace: str, name: str) -> ExposureDescriptor:
    try:
        document, found = store.get(_descriptor_kind(), namespace, name)
    except StoreError as e:
        raise _store_unavailable(e)

    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": f"Descriptor {namespace}/{name} not found",
                "error_code": "DESCRIPTOR_NOT_FOUND"
            }
        )
    return ExposureDescriptor.model_validate(document)


# === Descriptor Endpoints ===

@router.put(
    "/descriptors/{namespace}/{name}",
    response_model=ExposureDescriptor,
    response_model_by_alias=True,
    responses={
        503: {"description": "Object store unavailable", "model": ErrorResponse},
    },
    summary="Create or replace a descriptor",
    description="Store the desired state; uid and status survive replacement"
)
def apply_descriptor(
    namespace: str,
    name: str,
    body: DescriptorApply,
    store: ObjectStore = Depends(get_object_store),
    _: bool = Depends(verify_admin_token)
):
    """Create or replace a descriptor"""

    def replace_spec(document: dict) -> dict:
        current = document.get("metadata") or {}
        descriptor = ExposureDescriptor(
            metadata=ObjectMeta(
                name=name,
                namespace=namespace,
                uid=current.get("uid"),
                labels=body.labels,
                annotations=body.annotations,
            ),
            spec=body.spec,
            status=DescriptorStatus.model_validate(document.get("status") or {}),
        )
        result = descriptor.to_document()
        result["apiVersion"] = settings.OWNER_API_VERSION
        return result

    try:
        document, mutated = store.upsert(_descriptor_kind(), namespace, name, replace_spec)
    except StoreError as e:
        raise _store_unavailable(e)

    if mutated:
        logger.info(f"Descriptor applied: {namespace}/{name}")

    return ExposureDescriptor.model_validate(document)


@router.get(
    "/descriptors/{namespace}/{name}",
    response_model=ExposureDescriptor,
    response_model_by_alias=True,
    responses={
        404: {"description": "Descriptor not found", "model": ErrorResponse},
    },
    summary="Get a descriptor"
)
def get_descriptor(
    namespace: str,
    name: str,
    store: ObjectStore = Depends(get_object_store),
    _: bool = Depends(verify_admin_token)
):
    """Get a descriptor with its status"""
    return _load_descriptor(store, namespace, name)


@router.post(
    "/descriptors/{namespace}/{name}/reconcile",
    response_model=ReconcileResponse,
    response_model_by_alias=True,
    responses={
        404: {"description": "Descriptor not found", "model": ErrorResponse},
        503: {"description": "Object store unavailable", "model": ErrorResponse},
    },
    summary="Reconcile a descriptor",
    description="""
    Run one reconcile pass and persist the descriptor status.

    The stage tells the caller what to do next:
    - **success**: nothing to retry
    - **in_progress**: infrastructure is still populating status, retry later
    - **failed**: retry with backoff; `message` carries the error
    """
)
def reconcile_descriptor(
    namespace: str,
    name: str,
    store: ObjectStore = Depends(get_object_store),
    _: bool = Depends(verify_admin_token)
):
    """Reconcile a descriptor and write back its status"""
    descriptor = _load_descriptor(store, namespace, name)

    routing_config = RoutingConfig.from_settings()
    reconciler = ExposureReconciler(store, routing_config)
    stage, error = reconciler.reconcile(
        descriptor,
        Deadline(settings.RECONCILE_TIMEOUT_SECONDS)
    )

    def write_status(document: dict) -> dict:
        document["status"] = descriptor.status.to_document()
        return document

    try:
        store.upsert(_descriptor_kind(), namespace, name, write_status)
    except StoreError as e:
        raise _store_unavailable(e)

    routing_object = None
    mode = descriptor.spec.exposure_mode
    if mode is not None:
        routing_object = ObjectIdentity(
            kind=routing_config.kind_for(mode),
            namespace=namespace,
            name=routing_config.object_name(name, mode),
        )

    return ReconcileResponse(
        stage=stage,
        message=str(error) if error else None,
        status=descriptor.status,
        routing_object=routing_object,
    )
