# lis_core/common/errors.py
from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException


class DomainError(APIException):
    """
    Base for lab back office business errors.

    Subclasses flow through the global exception handler, so services can raise
    them directly and views stay thin.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed."
    default_code = "domain_error"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class IllegalTransition(DomainError):
    """
    Order status change that the lifecycle does not allow.
    """
    status_code = status.HTTP_409_CONFLICT
    default_code = "illegal_transition"

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(
            detail={
                "detail": f"Cannot move order from '{current}' to '{requested}'.",
                "current": current,
                "requested": requested,
            }
        )


class OrderLocked(DomainError):
    """
    Order is delivered or voided; its items can no longer change.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Order is closed and cannot be modified."
    default_code = "order_locked"


class Forbidden(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "forbidden"


class StorageError(DomainError):
    """
    Persistence failure. Multi-step writes are rolled back before this surfaces.
    """
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Storage operation failed."
    default_code = "storage_error"
