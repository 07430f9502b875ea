from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from opentelemetry.trace import SpanKind, Status, StatusCode


class TracingMiddleware(BaseHTTPMiddleware):
    """Серверный спан на каждый HTTP-запрос.

    Если запрос несёт traceparent, спан становится дочерним к удалённому,
    иначе начинается новая трасса.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        telemetry = request.app.state.telemetry
        parent = telemetry.extract(request.headers)
        attributes = {
            "http.request.method": request.method,
            "url.path": request.url.path,
        }

        with telemetry.start_operation(
            f"{request.method} {request.url.path}",
            attributes,
            context=parent,
            kind=SpanKind.SERVER
        ) as span:
            response = await call_next(request)
            span.set_attribute("http.response.status_code", response.status_code)
            if response.status_code >= 500:
                span.set_status(Status(StatusCode.ERROR))
            return response
