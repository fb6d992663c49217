"""Translation of domain exceptions into logged HTTP errors"""

import logging
from fastapi import HTTPException, Request
from fintrack.api.dependencies import get_request_id


def http_error(request: Request, status_code: int, error: Exception) -> HTTPException:
    """Log the failure with its request ID and build the matching HTTPException"""
    logging.warning(
        f"Request rejected: {error}",
        extra={
            "request_id": get_request_id(request),
            "path": request.url.path,
            "status_code": status_code,
        },
    )
    return HTTPException(status_code=status_code, detail=str(error))
