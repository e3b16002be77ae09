from fastapi import HTTPException

from staffqueue.services.exceptions import ConflictError, NotFoundError, ServiceError


def to_http_exception(exc: ServiceError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(
            status_code=409,
            detail={
                "message": str(exc),
                "conflicting_appointment_id": exc.conflicting_appointment_id,
            },
        )
    return HTTPException(status_code=502, detail=str(exc))
