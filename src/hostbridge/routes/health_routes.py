"""
Health check endpoint.
"""

import time

from starlette.requests import Request
from starlette.responses import JSONResponse

start_time = time.time()


async def health_check(request: Request) -> JSONResponse:
    """
    Basic health check endpoint.

    Returns 200 with SERVING while the process is up.
    """
    sessions = request.app.state.sessions
    return JSONResponse(
        {
            "status": "SERVING",
            "uptime_seconds": int(time.time() - start_time),
            "open_sessions": len(sessions),
        }
    )
