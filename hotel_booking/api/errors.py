"""
Translation of service Results into HTTP responses.
"""

import time
from typing import Awaitable, TypeVar

from fastapi import HTTPException, status

from hotel_booking.core.metrics import record_booking_operation
from hotel_booking.services.results import ErrorKind, Result

T = TypeVar("T")

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
}


async def unwrap(operation: str, call: Awaitable[Result[T]]) -> T:
    """Await a booking operation, record it, and raise its error as an HTTPException."""
    start = time.perf_counter()
    result = await call
    outcome = "success" if result.ok else result.error.kind.value
    record_booking_operation(operation, outcome, time.perf_counter() - start)

    if result.ok:
        return result.value
    raise HTTPException(status_code=ERROR_STATUS[result.error.kind], detail=result.error.message)
