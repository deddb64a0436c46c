"""SafeBoda API layer: routes, schemas, auth dependencies, and middleware."""

from src.api.auth import ADMIN_ROLE, AdminDep, require_role
from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import (
    AdminDashboardResponse,
    DriverCreateRequest,
    DriverUpdateRequest,
    ErrorResponse,
    HealthResponse,
    RiderCreateRequest,
    RiderUpdateRequest,
    TripUpdateRequest,
)

__all__ = [
    "ADMIN_ROLE",
    "AdminDep",
    "AdminDashboardResponse",
    "DriverCreateRequest",
    "DriverUpdateRequest",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "HealthResponse",
    "RequestLoggingMiddleware",
    "RiderCreateRequest",
    "RiderUpdateRequest",
    "TripUpdateRequest",
    "configure_cors",
    "require_role",
    "router",
]
