import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ip_intel.entrypoints import EntrypointRegistry, format_price
from ip_intel.models.request_models import IPLookupRequest
from ip_intel.models.response_models import HealthResponse
from tests.common import FakeLookupClient


async def _echo_handler(payload: IPLookupRequest, client) -> HealthResponse:
    return HealthResponse(status=payload.ip)


def _fake_client() -> FakeLookupClient:
    return FakeLookupClient()


def _registry() -> tuple[FastAPI, EntrypointRegistry]:
    app = FastAPI()
    registry = EntrypointRegistry(app, client_dependency=_fake_client)
    return app, registry


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(0, "$0"), (1000, "$0.001"), (3000, "$0.003"), (2500, "$0.0025"), (1_500_000, "$1.5")],
)
def test_format_price(amount: int, expected: str) -> None:
    assert format_price(amount) == expected


def test_register_rejects_duplicate_keys() -> None:
    _, registry = _registry()
    registry.register("echo", IPLookupRequest, price=10, handler=_echo_handler)

    with pytest.raises(ValueError, match="already registered"):
        registry.register("echo", IPLookupRequest, price=10, handler=_echo_handler)


def test_register_rejects_negative_price() -> None:
    _, registry = _registry()

    with pytest.raises(ValueError, match="negative price"):
        registry.register("echo", IPLookupRequest, price=-1, handler=_echo_handler)


def test_registered_entrypoint_is_invocable() -> None:
    app, registry = _registry()
    registry.register("echo", IPLookupRequest, price=0, handler=_echo_handler, description="Echo")

    response = TestClient(app).post("/entrypoints/echo/invoke", json={"input": {"ip": "1.1.1.1"}})

    assert response.status_code == 200
    assert response.json() == {"output": {"status": "1.1.1.1"}}
    assert "echo" in registry
    assert registry["echo"].is_free


def test_paid_endpoint_summaries_skip_free_entrypoints() -> None:
    _, registry = _registry()
    registry.register("free", IPLookupRequest, price=0, handler=_echo_handler, description="Free one")
    registry.register("paid", IPLookupRequest, price=2000, handler=_echo_handler, description="Paid one")
    registry.register("short", IPLookupRequest, price=1000, handler=_echo_handler, description="Long", summary="Short")

    assert registry.paid_endpoint_summaries() == {
        "paid": "Paid one - $0.002",
        "short": "Short - $0.001",
    }
