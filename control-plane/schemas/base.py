# control-plane/schemas/base.py
"""
Base schemas for API responses and stored resources
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import TypeVar, Generic, Optional
from datetime import datetime

T = TypeVar("T")


class ResourceModel(BaseModel):
    """
    Base for every stored resource document
    Python attributes are snake_case, serialized keys are camelCase
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self) -> dict:
        """Serialize to the camelCase dict kept in the object store"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BaseResponse(BaseModel, Generic[T]):
    """
    Standard API response wrapper
    All API responses should follow this format
    """
    success: bool = True
    message: str = "Operation successful"
    data: Optional[T] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """
    Standard error response
    Used for 4xx and 5xx responses
    """
    success: bool = False
    error: str
    error_code: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Object not found",
                "error_code": "OBJECT_NOT_FOUND",
                "details": {"kind": "Ingress", "namespace": "default", "name": "grafana-ingress"},
                "timestamp": "2025-12-26T10:00:00Z"
            }
        }
    )


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = "healthy"
    service: str = "control-plane"
    version: str = "1.0.0"
    uptime_seconds: Optional[float] = None
    database: str = "connected"
    timestamp: datetime = Field(default_factory=datetime.utcnow)
