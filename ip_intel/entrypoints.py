from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, ValidationError

from ip_intel.clients.base import BaseIPLookupClient
from ip_intel.errors import InvalidIpError, ProviderLookupError, ReservedIpError, UpstreamServiceError
from ip_intel.logger import logger
from ip_intel.models.response_models import EntrypointInfo

# Prices are expressed in micro-dollars: 1000 == $0.001.
PRICE_UNITS_PER_USD = 1_000_000

EntrypointHandler = Callable[[Any, BaseIPLookupClient], Awaitable[BaseModel]]


def format_price(amount: int) -> str:
    """Render a micro-dollar amount as a dollar string, e.g. 1000 -> `$0.001`."""
    dollars = f"{amount / PRICE_UNITS_PER_USD:.6f}".rstrip("0").rstrip(".")
    return f"${dollars}"


class InvokeRequest(BaseModel):
    """Request envelope shared by every entrypoint."""

    input: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class Entrypoint:
    key: str
    input_model: type[BaseModel]
    price: int
    handler: EntrypointHandler
    description: str = ""
    summary: str = ""

    @property
    def is_free(self) -> bool:
        return self.price == 0

    def info(self) -> EntrypointInfo:
        return EntrypointInfo(
            key=self.key,
            description=self.description,
            price=self.price,
            price_usd=format_price(self.price),
        )


class EntrypointRegistry:
    """Registers priced entrypoints as HTTP routes on a FastAPI app.

    Every entrypoint is exposed as `POST {prefix}/{key}/invoke`, taking
    `{"input": {...}}` and answering `{"output": {...}}`. The catalog of all
    registered entrypoints is served from `GET {prefix}`. Charging for calls
    is left to whatever fronts the service; only the price is recorded here.
    """

    def __init__(
        self,
        app: FastAPI,
        client_dependency: Callable[..., BaseIPLookupClient],
        prefix: str = "/entrypoints",
    ) -> None:
        self._app = app
        self._client_dependency = client_dependency
        self._prefix = prefix.rstrip("/")
        self._entrypoints: dict[str, Entrypoint] = {}

        app.add_api_route(
            self._prefix,
            self.catalog,
            methods=["GET"],
            response_model=list[EntrypointInfo],
            tags=["entrypoints"],
            summary="List the registered entrypoints and their prices.",
        )

    def __contains__(self, key: str) -> bool:
        return key in self._entrypoints

    def __getitem__(self, key: str) -> Entrypoint:
        return self._entrypoints[key]

    async def catalog(self) -> list[EntrypointInfo]:
        return [entrypoint.info() for entrypoint in self._entrypoints.values()]

    def paid_endpoint_summaries(self) -> dict[str, str]:
        """Short `"<summary> - $<price>"` labels for every paid entrypoint, keyed by entrypoint key."""
        return {
            key: f"{entrypoint.summary or entrypoint.description} - {format_price(entrypoint.price)}"
            for key, entrypoint in self._entrypoints.items()
            if not entrypoint.is_free
        }

    def register(
        self,
        key: str,
        input_model: type[BaseModel],
        price: int,
        handler: EntrypointHandler,
        description: str = "",
        summary: str = "",
    ) -> Entrypoint:
        if key in self._entrypoints:
            raise ValueError(f"Entrypoint {key!r} is already registered")
        if price < 0:
            raise ValueError(f"Entrypoint {key!r} has a negative price")

        entrypoint = Entrypoint(
            key=key,
            input_model=input_model,
            price=price,
            handler=handler,
            description=description,
            summary=summary,
        )
        self._entrypoints[key] = entrypoint

        self._app.add_api_route(
            f"{self._prefix}/{key}/invoke",
            self._build_route(entrypoint),
            methods=["POST"],
            status_code=status.HTTP_200_OK,
            tags=["entrypoints"],
            summary=description or None,
            name=f"invoke_{key.replace('-', '_')}",
        )
        logger.debug(f"Registered entrypoint key={key} price={price}")
        return entrypoint

    def _build_route(self, entrypoint: Entrypoint) -> Callable[..., Awaitable[dict[str, Any]]]:
        async def invoke(
            request: Request,
            client: Annotated[BaseIPLookupClient, Depends(self._client_dependency)],
            body: InvokeRequest | None = None,
        ) -> dict[str, Any]:
            # Read by the exception handlers to tag error payloads.
            request.state.entrypoint = entrypoint.key

            payload = _parse_input(entrypoint, body)

            logger.info(
                "Invoking entrypoint "
                f"path={request.url.path} entrypoint={entrypoint.key} price={entrypoint.price} input={payload!r}"
            )
            output = await _call_handler(entrypoint, payload, client)
            return {"output": output.model_dump(mode="json", by_alias=True)}

        return invoke


def _parse_input(entrypoint: Entrypoint, body: InvokeRequest | None) -> BaseModel:
    """Validate the `input` object against the entrypoint's input model.

    Only caller input is reported as a request error (400); validation errors
    raised later, e.g. on provider data, reach the catch-all handler.
    """
    try:
        return entrypoint.input_model.model_validate(body.input if body else {})
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(), body=body.input if body else None) from exc


async def _call_handler(entrypoint: Entrypoint, payload: BaseModel, client: BaseIPLookupClient) -> BaseModel:
    """Run an entrypoint handler, translating domain errors into HTTP errors."""
    key = entrypoint.key
    try:
        return await entrypoint.handler(payload, client)
    except InvalidIpError as exc:
        logger.error(f"Invalid IP error entrypoint={key} error={exc}")
        raise _http_error(status.HTTP_400_BAD_REQUEST, "invalid_ip", exc, key) from exc
    except ReservedIpError as exc:
        logger.error(f"Reserved/private IP used for lookup entrypoint={key} error={exc}")
        raise _http_error(status.HTTP_400_BAD_REQUEST, "reserved_ip", exc, key) from exc
    except ProviderLookupError as exc:
        logger.error(f"IP provider rejected the lookup entrypoint={key} error={exc}")
        raise _http_error(status.HTTP_400_BAD_REQUEST, "lookup_failed", exc, key) from exc
    except UpstreamServiceError as exc:
        logger.exception(f"Upstream IP provider error entrypoint={key} error={exc}")
        raise _http_error(status.HTTP_502_BAD_GATEWAY, "upstream_error", exc, key) from exc


def _http_error(status_code: int, code: str, exc: Exception, entrypoint: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": str(exc),
            "entrypoint": entrypoint,
        },
    )
