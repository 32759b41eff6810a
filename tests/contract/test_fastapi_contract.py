from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from sysprobe.api.router import create_app
from sysprobe.config import SysprobeConfig
from sysprobe.engine.resolver import ResourceResolver
from sysprobe.host.family import OsFamily
from sysprobe.net.connectivity import ConnectivityReport


@pytest.fixture()
def make_client(fake_host):
    def _make(**config_overrides) -> TestClient:
        resolver = ResourceResolver(OsFamily.LINUX, context=fake_host.context())
        app = create_app(resolver=resolver, config=SysprobeConfig(**config_overrides))
        return TestClient(app)

    return _make


def test_snapshot_from_container_sources(fake_host, make_client) -> None:
    fake_host.with_cgroup_v2()
    client = make_client()

    response = client.get("/v1/snapshot")
    assert response.status_code == 200
    payload = response.json()

    assert payload["method"] == "primary_container"
    assert payload["used_fallback"] is False
    assert payload["cpu"]["limit_cores"] == pytest.approx(2.0)
    assert payload["cpu"]["usage_percent"] == pytest.approx(25.0)
    assert payload["memory"]["limit_mb"] == pytest.approx(2048.0)
    assert payload["cpu_source"] == "cgroup_v2"


def test_snapshot_command_mode(fake_host, make_client) -> None:
    fake_host.with_cgroup_v2().with_linux_commands()
    client = make_client()

    payload = client.get("/v1/snapshot", params={"mode": "command"}).json()

    assert payload["method"] == "command_based"
    assert payload["memory"]["available_bytes"] == 8388608
    assert payload["cpu"]["load_average"] == "0.52, 0.58, 0.59"


def test_snapshot_rejects_unknown_mode(make_client) -> None:
    response = make_client().get("/v1/snapshot", params={"mode": "fastest"})

    assert response.status_code == 400
    assert "Unsupported mode" in response.json()["detail"]


def test_snapshot_unavailable_maps_to_503(make_client) -> None:
    response = make_client().get("/v1/snapshot")

    assert response.status_code == 503
    assert "information not found" in response.json()["detail"]


def test_single_metric(fake_host, make_client) -> None:
    fake_host.with_cgroup_v1()
    client = make_client()

    response = client.get("/v1/metrics/memory_limit_bytes")

    assert response.status_code == 200
    assert response.json() == {"metric": "memory_limit_bytes", "value": 1024**3}


def test_unknown_metric_is_404(make_client) -> None:
    assert make_client().get("/v1/metrics/disk_usage").status_code == 404


def test_raw_output_is_plain_text(fake_host, make_client) -> None:
    fake_host.with_linux_commands()
    client = make_client()

    response = client.get("/v1/raw/uptime")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "load average" in response.text


def test_raw_output_errors(make_client) -> None:
    client = make_client()

    assert client.get("/v1/raw/netstat").status_code == 404
    assert client.get("/v1/raw/processes").status_code == 503


def test_connectivity_uses_configured_timeout(make_client) -> None:
    report = ConnectivityReport(
        domain="example.com", port="443", timeout_seconds=7, tcp="success", http="200 OK"
    )
    client = make_client(connect_timeout=7)

    with patch("sysprobe.api.router.check_connectivity", return_value=report) as mocked:
        response = client.get("/v1/connectivity", params={"domain": "example.com", "port": "443"})

    assert response.status_code == 200
    assert response.json()["http"] == "200 OK"
    mocked.assert_called_once_with("example.com", "443", 7)


def test_connectivity_requires_domain(make_client) -> None:
    assert make_client().get("/v1/connectivity").status_code == 422


def test_health(make_client) -> None:
    assert make_client().get("/health").json() == {"status": "ok"}
