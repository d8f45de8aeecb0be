from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


class ScheduleDataError(Exception):
    """Reference data for the calendar could not be used."""


class FixtureLoadError(ScheduleDataError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load fixtures from {path}: {reason}")
        self.path = path
        self.reason = reason


def create_error_response(error_message: str) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail)
    )
