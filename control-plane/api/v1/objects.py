# control-plane/api/v1/objects.py
"""
Object API Endpoints
Read routing objects; apply externally managed objects (Gateways,
load balancer status published by infrastructure controllers)
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Any, Dict, List, Optional
import logging

from schemas.base import BaseResponse, ErrorResponse
from store.object_store import ObjectStore, get_object_store
from core.errors import StoreError
from .auth import verify_admin_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/objects/{kind}",
    response_model=BaseResponse[List[Dict[str, Any]]],
    summary="List objects of a kind"
)
def list_objects(
    kind: str,
    namespace: Optional[str] = Query(None, description="Filter by namespace"),
    store: ObjectStore = Depends(get_object_store),
    _: bool = Depends(verify_admin_token)
):
    """List stored objects of a kind"""
    try:
        documents = store.list(kind, namespace)
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": str(e), "error_code": "STORE_UNAVAILABLE"}
        )
    return BaseResponse(message=f"{len(documents)} {kind} object(s)", data=documents)


@router.get(
    "/objects/{kind}/{namespace}/{name}",
    response_model=BaseResponse[Dict[str, Any]],
    responses={
        200: {"description": "Object found"},
        404: {"description": "Object not found", "model": ErrorResponse},
    },
    summary="Get an object",
    description="Get the stored document of an object, status included"
)
def get_object(
    kind: str,
    namespace: str,
    name: str,
    store: ObjectStore = Depends(get_object_store),
    _: bool = Depends(verify_admin_token)
):
    """Get one object by identity"""
    try:
        document, found = store.get(kind, namespace, name)
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": str(e), "error_code": "STORE_UNAVAILABLE"}
        )

    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": f"{kind} {namespace}/{name} not found",
                "error_code": "OBJECT_NOT_FOUND"
            }
        )

    return BaseResponse(data=document)


@router.put(
    "/objects/{kind}/{namespace}/{name}",
    response_model=BaseResponse[Dict[str, Any]],
    summary="Apply an object",
    description="""
    Create or replace an object document.

    Used by infrastructure controllers to publish Gateways and load
    balancer status. The uid of an existing object is kept.
    """
)
def apply_object(
    kind: str,
    namespace: str,
    name: str,
    body: Dict[str, Any],
    store: ObjectStore = Depends(get_object_store),
    _: bool = Depends(verify_admin_token)
):
    """Create or replace an object"""

    def replace_document(document: dict) -> dict:
        uid = (document.get("metadata") or {}).get("uid")
        result = dict(body)
        metadata = dict(result.get("metadata") or {})
        if uid:
            metadata["uid"] = uid
        result["metadata"] = metadata
        return result

    try:
        document, mutated = store.upsert(kind, namespace, name, replace_document)
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": str(e), "error_code": "STORE_UNAVAILABLE"}
        )

    message = "Object updated" if mutated else "Object unchanged"
    logger.info(f"{message}: {kind} {namespace}/{name}")
    return BaseResponse(message=message, data=document)


@router.delete(
    "/objects/{kind}/{namespace}/{name}",
    response_model=BaseResponse[None],
    responses={
        404: {"description": "Object not found", "model": ErrorResponse},
    },
    summary="Delete an object"
)
def delete_object(
    kind: str,
    namespace: str,
    name: str,
    store: ObjectStore = Depends(get_object_store),
    _: bool = Depends(verify_admin_token)
):
    """Delete an object by identity"""
    try:
        deleted = store.delete(kind, namespace, name)
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": str(e), "error_code": "STORE_UNAVAILABLE"}
        )

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": f"{kind} {namespace}/{name} not found",
                "error_code": "OBJECT_NOT_FOUND"
            }
        )

    return BaseResponse(message=f"{kind} {namespace}/{name} deleted")
