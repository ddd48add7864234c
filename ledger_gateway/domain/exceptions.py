"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NetworkError(DomainException):
    """ERP API is unreachable, timed out, or returned a server error"""

    pass


class ValidationError(DomainException):
    """Record or response payload is malformed or violates an invariant"""

    pass


class NotFoundError(DomainException):
    """Referenced party or transaction does not exist"""

    pass


class TallySyncError(DomainException):
    """Tally ERP sync trigger failed"""

    pass
