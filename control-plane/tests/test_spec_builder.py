"""Tests for core.spec_builder and the DesiredState port invariant."""

import pytest
from pydantic import ValidationError

from core.routing_config import RoutingConfig
from core.spec_builder import build_routing_spec, resolve_backend_port
from schemas.descriptor import DesiredState, ExposureMode, ServiceReference
from schemas.routing import HTTPRouteSpec, IngressSpec


def _desired(port, mode=ExposureMode.INGRESS) -> DesiredState:
    return DesiredState(
        service=ServiceReference(name="grafana-service", namespace="monitoring"),
        target_port=port,
        exposure_mode=mode,
    )


class TestResolveBackendPort:
    def test_positive_number(self) -> None:
        port = resolve_backend_port(3000)
        assert port.number == 3000
        assert port.name is None

    def test_name(self) -> None:
        port = resolve_backend_port("http")
        assert port.number is None
        assert port.name == "http"


class TestBuildRoutingSpec:
    def test_single_rule_single_backend(self, routing_config) -> None:
        spec = build_routing_spec(_desired(3000), routing_config)

        assert len(spec.rules) == 1
        rule = spec.rules[0]
        assert len(rule.backend_refs) == 1
        backend = rule.backend_refs[0]
        assert backend.name == "grafana-service"
        assert backend.namespace == "monitoring"
        assert backend.port.number == 3000
        assert backend.port.name is None

    def test_default_path_prefix(self, routing_config) -> None:
        spec = build_routing_spec(_desired(3000), routing_config)

        assert len(spec.rules[0].matches) == 1
        match = spec.rules[0].matches[0]
        assert match.type == "PathPrefix"
        assert match.value == "/"

    def test_named_port_stays_named(self, routing_config) -> None:
        spec = build_routing_spec(_desired("grafana-http"), routing_config)

        port = spec.rules[0].backend_refs[0].port
        assert port.name == "grafana-http"
        assert port.number is None

    def test_ingress_mode_builds_ingress_spec(self, routing_config) -> None:
        spec = build_routing_spec(_desired(3000, ExposureMode.INGRESS), routing_config)
        assert isinstance(spec, IngressSpec)
        assert spec.ingress_class_name is None

    def test_route_mode_builds_route_spec(self, routing_config) -> None:
        spec = build_routing_spec(_desired(3000, ExposureMode.ROUTE), routing_config)
        assert isinstance(spec, HTTPRouteSpec)
        assert spec.hostnames == []
        assert spec.parent_refs == []

    def test_path_comes_from_config(self) -> None:
        config = RoutingConfig(default_path="/grafana", path_match_type="Prefix")
        spec = build_routing_spec(_desired(3000), config)

        match = spec.rules[0].matches[0]
        assert match.value == "/grafana"
        assert match.type == "Prefix"

    def test_is_pure(self, routing_config) -> None:
        desired = _desired(3000)
        assert build_routing_spec(desired, routing_config) == build_routing_spec(desired, routing_config)

    def test_document_uses_camel_case(self, routing_config) -> None:
        document = build_routing_spec(_desired(3000, ExposureMode.ROUTE), routing_config).to_document()

        assert document["rules"][0]["backendRefs"][0]["port"] == {"number": 3000}
        assert "parentRefs" in document


class TestDesiredStatePort:
    @pytest.mark.parametrize("port", [0, -80])
    def test_non_positive_number_rejected(self, port) -> None:
        with pytest.raises(ValidationError):
            _desired(port)

    @pytest.mark.parametrize("port", ["", "   "])
    def test_blank_name_rejected(self, port) -> None:
        with pytest.raises(ValidationError):
            _desired(port)

    def test_missing_port_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DesiredState(service=ServiceReference(name="svc", namespace="ns"))

    def test_camel_case_input(self) -> None:
        desired = DesiredState.model_validate({
            "service": {"name": "svc", "namespace": "ns"},
            "targetPort": "http",
            "exposureMode": "route",
            "preferExternalAccess": True,
        })

        assert desired.target_port == "http"
        assert desired.exposure_mode is ExposureMode.ROUTE
        assert desired.prefer_external_access is True

    def test_frozen(self) -> None:
        desired = _desired(3000)
        with pytest.raises(ValidationError):
            desired.target_port = 8080
