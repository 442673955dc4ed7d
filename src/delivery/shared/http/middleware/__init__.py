from delivery.shared.http.middleware.logging_middleware import LoggingMiddleware
from delivery.shared.http.middleware.request_id_middleware import REQUEST_ID_HEADER, RequestIdMiddleware

__all__ = ["LoggingMiddleware", "RequestIdMiddleware", "REQUEST_ID_HEADER"]
