"""Tests for endpoint synthesis."""

from routedns.core.annotations import HOSTNAME_ANNOTATION, TARGET_ANNOTATION, TTL_ANNOTATION
from routedns.core.models import (
    Endpoint,
    RecordType,
    Route,
    RouteKind,
    RoutingObject,
)
from routedns.core.traefik.endpoints import build_endpoints, endpoints_for_object, merge_hostnames

TARGET = "target.domain.tld"


def routing_object(
    kind: RouteKind = RouteKind.HTTP,
    annotations: dict[str, str] | None = None,
    matches: list[str] | None = None,
    name: str = "route",
) -> RoutingObject:
    return RoutingObject(
        kind=kind,
        namespace="traefik",
        name=name,
        annotations=annotations or {},
        routes=tuple(Route(match=m) for m in matches or []),
    )


class TestMergeHostnames:
    """Tests for merge_hostnames."""

    def test_annotation_first(self):
        assert merge_hostnames(["f.example.com"], ["g.example.com"]) == [
            "f.example.com",
            "g.example.com",
        ]

    def test_overlap_emitted_once(self):
        assert merge_hostnames(
            ["a.example.com", "b.example.com"],
            ["b.example.com", "c.example.com"],
        ) == ["a.example.com", "b.example.com", "c.example.com"]

    def test_empty(self):
        assert merge_hostnames([], []) == []


class TestBuildEndpoints:
    """Tests for build_endpoints."""

    def test_one_endpoint_per_host(self):
        endpoints = build_endpoints(["a.example.com", "b.example.com"], [TARGET], 0, "ingressroute/ns/x")
        assert [e.dns_name for e in endpoints] == ["a.example.com", "b.example.com"]
        for endpoint in endpoints:
            assert endpoint.record_type == RecordType.CNAME
            assert endpoint.targets == [TARGET]
            assert endpoint.labels == {"resource": "ingressroute/ns/x"}
            assert endpoint.provider_specific == {}

    def test_targets_not_shared_between_endpoints(self):
        endpoints = build_endpoints(["a.example.com", "b.example.com"], [TARGET], 0, "r")
        endpoints[0].targets.append("other")
        assert endpoints[1].targets == [TARGET]

    def test_no_hosts(self):
        assert build_endpoints([], [TARGET], 0, "r") == []

    def test_no_targets(self):
        assert build_endpoints(["a.example.com"], [], 0, "r") == []


class TestEndpointsForObject:
    """Tests for endpoints_for_object."""

    def test_annotation_only(self):
        obj = routing_object(
            annotations={HOSTNAME_ANNOTATION: "a.example.com", TARGET_ANNOTATION: TARGET},
            name="ingressroute-annotation",
        )
        assert endpoints_for_object(obj) == [
            Endpoint(
                dns_name="a.example.com",
                record_type=RecordType.CNAME,
                targets=[TARGET],
                record_ttl=0,
                labels={"resource": "ingressroute/traefik/ingressroute-annotation"},
                provider_specific={},
            )
        ]

    def test_annotation_and_rules_union(self):
        obj = routing_object(
            annotations={HOSTNAME_ANNOTATION: "f.example.com", TARGET_ANNOTATION: TARGET},
            matches=["Host(`g.example.com`, `h.example.com`)"],
        )
        assert [e.dns_name for e in endpoints_for_object(obj)] == [
            "f.example.com",
            "g.example.com",
            "h.example.com",
        ]

    def test_host_in_annotation_and_rule_emitted_once(self):
        obj = routing_object(
            annotations={HOSTNAME_ANNOTATION: "b.example.com", TARGET_ANNOTATION: TARGET},
            matches=["Host(`a.example.com`) || Host(`b.example.com`)"],
        )
        assert [e.dns_name for e in endpoints_for_object(obj)] == [
            "b.example.com",
            "a.example.com",
        ]

    def test_missing_target(self):
        obj = routing_object(
            annotations={HOSTNAME_ANNOTATION: "a.example.com"},
            matches=["Host(`b.example.com`)"],
        )
        assert endpoints_for_object(obj) == []

    def test_target_without_hosts(self):
        obj = routing_object(annotations={TARGET_ANNOTATION: TARGET})
        assert endpoints_for_object(obj) == []

    def test_target_with_path_only_rule(self):
        obj = routing_object(
            annotations={TARGET_ANNOTATION: TARGET},
            matches=["PathPrefix(`/api`)"],
        )
        assert endpoints_for_object(obj) == []

    def test_wildcard_rule(self):
        obj = routing_object(annotations={TARGET_ANNOTATION: TARGET}, matches=["Host(`*`)"])
        assert endpoints_for_object(obj) == []

    def test_ttl_applied(self):
        obj = routing_object(
            annotations={
                HOSTNAME_ANNOTATION: "a.example.com",
                TARGET_ANNOTATION: TARGET,
                TTL_ANNOTATION: "300",
            },
        )
        assert endpoints_for_object(obj)[0].record_ttl == 300

    def test_tcp_uses_host_sni(self):
        obj = routing_object(
            kind=RouteKind.TCP,
            annotations={TARGET_ANNOTATION: TARGET},
            matches=["HostSNI(`b.example.com`) || Host(`x.example.com`)"],
            name="tcp",
        )
        endpoints = endpoints_for_object(obj)
        assert [e.dns_name for e in endpoints] == ["b.example.com"]
        assert endpoints[0].labels == {"resource": "ingressroutetcp/traefik/tcp"}

    def test_udp_ignores_routes(self):
        obj = routing_object(
            kind=RouteKind.UDP,
            annotations={HOSTNAME_ANNOTATION: "a.example.com", TARGET_ANNOTATION: TARGET},
            matches=["HostSNI(`b.example.com`)"],
            name="udp",
        )
        endpoints = endpoints_for_object(obj)
        assert [e.dns_name for e in endpoints] == ["a.example.com"]
        assert endpoints[0].labels == {"resource": "ingressrouteudp/traefik/udp"}

    def test_ignore_hostname_annotation(self):
        obj = routing_object(
            annotations={HOSTNAME_ANNOTATION: "a.example.com", TARGET_ANNOTATION: TARGET},
            matches=["Host(`b.example.com`)"],
        )
        endpoints = endpoints_for_object(obj, ignore_hostname_annotation=True)
        assert [e.dns_name for e in endpoints] == ["b.example.com"]

    def test_malformed_ttl_keeps_endpoints(self):
        obj = routing_object(
            annotations={TARGET_ANNOTATION: TARGET, TTL_ANNOTATION: "1" * 400 + "h"},
            matches=["Host(`a.example.com`)"],
        )
        endpoints = endpoints_for_object(obj)
        assert [e.dns_name for e in endpoints] == ["a.example.com"]
        assert endpoints[0].record_ttl == 0

    def test_deterministic(self):
        obj = routing_object(
            annotations={HOSTNAME_ANNOTATION: "z.example.com, a.example.com", TARGET_ANNOTATION: TARGET},
            matches=["Host(`m.example.com`)", "Host(`a.example.com`, `b.example.com`)"],
        )
        first = endpoints_for_object(obj)
        second = endpoints_for_object(obj)
        assert first == second
        assert [e.dns_name for e in first] == [
            "z.example.com",
            "a.example.com",
            "m.example.com",
            "b.example.com",
        ]
