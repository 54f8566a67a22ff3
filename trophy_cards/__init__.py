"""GitHub profile trophy cards served as SVG."""

from .pipeline import RequestPipeline, build_app
from .types import ClientType, Err, ErrorCause, Ok, Request, Response, ServiceError

__all__ = [
    "ClientType",
    "Err",
    "ErrorCause",
    "Ok",
    "Request",
    "RequestPipeline",
    "Response",
    "ServiceError",
    "build_app",
]
