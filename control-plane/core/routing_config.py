# control-plane/core/routing_config.py
"""
Routing configuration passed into the spec builder and resolver
"""

from typing import Optional, Type
from pydantic import BaseModel, ConfigDict

from config import Settings, settings as default_settings
from schemas.descriptor import ExposureMode
from schemas.routing import RoutingObject, Ingress, HTTPRoute


# Routing object model per exposure mode
ROUTING_OBJECT_MODELS = {
    ExposureMode.INGRESS: Ingress,
    ExposureMode.ROUTE: HTTPRoute,
}


class RoutingConfig(BaseModel):
    """Kind names, naming rules and defaults for routing objects"""
    ingress_kind: str = "Ingress"
    ingress_api_version: str = "networking.k8s.io/v1"
    route_kind: str = "HTTPRoute"
    route_api_version: str = "gateway.networking.k8s.io/v1"
    gateway_kind: str = "Gateway"

    ingress_name_suffix: str = "-ingress"
    route_name_suffix: str = "-route"

    default_path: str = "/"
    path_match_type: str = "PathPrefix"

    owner_kind: str = "ExposureDescriptor"
    owner_api_version: str = "endpoints.example.com/v1"

    admin_url_protocol: str = "http"

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RoutingConfig":
        """Build from application settings"""
        s = settings or default_settings
        return cls(
            ingress_kind=s.INGRESS_KIND,
            ingress_api_version=s.INGRESS_API_VERSION,
            route_kind=s.ROUTE_KIND,
            route_api_version=s.ROUTE_API_VERSION,
            gateway_kind=s.GATEWAY_KIND,
            ingress_name_suffix=s.INGRESS_NAME_SUFFIX,
            route_name_suffix=s.ROUTE_NAME_SUFFIX,
            default_path=s.DEFAULT_PATH,
            path_match_type=s.PATH_MATCH_TYPE,
            owner_kind=s.OWNER_KIND,
            owner_api_version=s.OWNER_API_VERSION,
            admin_url_protocol=s.ADMIN_URL_PROTOCOL,
        )

    def kind_for(self, mode: ExposureMode) -> str:
        return self.route_kind if mode == ExposureMode.ROUTE else self.ingress_kind

    def api_version_for(self, mode: ExposureMode) -> str:
        return self.route_api_version if mode == ExposureMode.ROUTE else self.ingress_api_version

    def object_name(self, descriptor_name: str, mode: ExposureMode) -> str:
        """Deterministic routing object name for a descriptor"""
        suffix = self.route_name_suffix if mode == ExposureMode.ROUTE else self.ingress_name_suffix
        return f"{descriptor_name}{suffix}"

    @staticmethod
    def routing_object_class(mode: ExposureMode) -> Type[RoutingObject]:
        return ROUTING_OBJECT_MODELS[mode]
