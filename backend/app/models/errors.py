"""Error taxonomy and the API error envelope.

Pipeline stages raise ``RoutePlanningError`` subclasses. Only errors marked
``user_facing`` may have their message shown to end users; everything else
collapses to a generic message at the API boundary.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Machine-readable error codes returned by the API."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    PLACE_NOT_FOUND = "PLACE_NOT_FOUND"
    NO_ROUTE = "NO_ROUTE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    API_ERROR = "API_ERROR"


GENERIC_ROUTE_ERROR = "Failed to generate routes."


class AppError(BaseModel):
    """Error payload returned in API responses."""

    code: ErrorCode
    message: str = Field(..., description="Error detail, safe to show")
    user_message: str = Field(..., description="Message for the end user")
    details: Optional[dict] = None


class RoutePlanningError(Exception):
    """Base class for route planning failures."""

    code: ErrorCode = ErrorCode.API_ERROR
    user_facing: bool = False

    def details(self) -> Optional[dict]:
        return None

    def to_app_error(self) -> AppError:
        if self.user_facing:
            return AppError(
                code=self.code,
                message=str(self),
                user_message=str(self),
                details=self.details(),
            )
        return AppError(
            code=self.code,
            message=GENERIC_ROUTE_ERROR,
            user_message=GENERIC_ROUTE_ERROR,
        )


class NotFoundError(RoutePlanningError):
    """A place name could not be geocoded."""

    code = ErrorCode.PLACE_NOT_FOUND
    user_facing = True

    def __init__(self, query: str, country: str) -> None:
        self.query = query
        super().__init__(f'Could not find "{query}" in {country}. Try a more specific name.')

    def details(self) -> dict:
        return {"query": self.query}


class NoRouteError(RoutePlanningError):
    """No drivable path between two resolved points."""

    code = ErrorCode.NO_ROUTE
    user_facing = True

    def __init__(self, message: str = "No drivable route found between these locations.") -> None:
        super().__init__(message)


class UpstreamFailure(RoutePlanningError):
    """A single upstream call failed."""

    code = ErrorCode.UPSTREAM_ERROR


class UpstreamTimeoutError(UpstreamFailure):
    """A single upstream call timed out."""

    code = ErrorCode.UPSTREAM_TIMEOUT


class InternalError(RoutePlanningError):
    """Unexpected failure, e.g. a malformed upstream payload."""

    code = ErrorCode.API_ERROR
