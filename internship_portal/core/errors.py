"""
Error taxonomy for the portal.

Services raise these; main.py maps each one to an HTTP response:
- ValidationError    -> 400
- AuthorizationError -> 403
- NotFoundError      -> 404
- ConflictError      -> 400 (duplicate application / email)
- StorageError       -> 400 (upload rejected)
- UnexpectedError    -> 500
"""


class PortalError(Exception):
    """Base class. Every error is terminal for the request that raised it."""

    status_code = 500
    default_detail = "Server error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(PortalError):
    status_code = 400
    default_detail = "Invalid request"


class AuthorizationError(PortalError):
    status_code = 403
    default_detail = "Access denied"


class NotFoundError(PortalError):
    status_code = 404
    default_detail = "Not found"


class ConflictError(PortalError):
    status_code = 400
    default_detail = "Already exists"


class StorageError(PortalError):
    status_code = 400
    default_detail = "File rejected"


class UnexpectedError(PortalError):
    status_code = 500
    default_detail = "Server error"
