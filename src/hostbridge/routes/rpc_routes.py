"""
Routes for host bridge calls.

Provides:
- POST /{service}/{method}: unary calls answer JSON, server-streaming calls
  answer an NDJSON stream
- GET /services: the service catalog
"""

import json

from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse, StreamingResponse

from hostbridge.dispatcher import MockDispatcher
from hostbridge.logger import get_logger
from hostbridge.services import SERVICES, find_service, is_streaming

logger = get_logger(__name__)


def _get_dispatcher(request: Request) -> MockDispatcher:
    """Get the MockDispatcher from app state."""
    return request.app.state.dispatcher


async def _read_body(request: Request) -> dict:
    """Parse the JSON body; anything that is not a JSON object becomes {}."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug(f"Ignoring non-JSON body for {request.url.path}")
        return {}
    return body if isinstance(body, dict) else {}


async def call_method(request: Request):
    """
    POST /{service}/{method}: Invoke a host bridge method.

    Body: the method's request message as JSON, e.g.
        POST /host.DiffService/openDiff  {"path": "src/app.py"}
    """
    dispatcher = _get_dispatcher(request)
    service = request.path_params["service"]
    method = request.path_params["method"]
    body = await _read_body(request)

    if find_service(service) is None:
        logger.debug(f"{service} is not a known host service; answering anyway")

    if is_streaming(method):
        updates = dispatcher.stream(service, method, body)

        async def ndjson():
            async for update in updates:
                yield json.dumps(update) + "\n"

        return StreamingResponse(ndjson(), media_type="application/x-ndjson")

    try:
        result = await dispatcher.handle(service, method, body)
    except ValidationError as e:
        logger.warning(f"Invalid request for {service}.{method}: {e}")
        return JSONResponse({"error": str(e)}, status_code=400)
    except Exception as e:
        logger.error(f"Error handling {service}.{method}: {e}")
        return JSONResponse({"error": f"Internal error: {e}"}, status_code=500)

    return JSONResponse(result)


async def list_services(request: Request) -> JSONResponse:
    """GET /services: List the host services and their methods."""
    services = [s.to_dict() for s in SERVICES]
    return JSONResponse({"services": services, "count": len(services)})
