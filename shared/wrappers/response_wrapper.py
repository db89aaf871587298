import json
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from fastapi.responses import JSONResponse

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wrap successful JSON bodies in the JsonOutResult envelope.

    Error bodies are already enveloped by the exception handlers.
    """

    async def dispatch(self, request, call_next: Callable):
        # Skip OpenAPI/Swagger endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        response = await call_next(request)

        if not (200 <= response.status_code < 400) or \
                "application/json" not in response.headers.get("content-type", ""):
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        headers = {k: v for k, v in response.headers.items()
                   if k.lower() != "content-length"}

        try:
            data = json.loads(body_bytes.decode("utf-8"))
        except ValueError:
            return Response(content=body_bytes, status_code=response.status_code,
                            headers=headers)

        # Skip if already wrapped
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            return JSONResponse(content=data, status_code=response.status_code, headers=headers)

        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY,
            message="Data retrieved successfully"
        ).model_dump()

        return JSONResponse(content=wrapped, status_code=response.status_code, headers=headers)
