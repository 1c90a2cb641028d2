"""
Custom exception classes for the query layer.

Search criteria are never validated beyond presence checks, so only two
conditions surface to callers: a page request that cannot be translated
into an offset/limit pair, and a failure of the underlying store.
"""


class AppException(Exception):
    """
    Base exception class for all roster exceptions.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class InvalidPageRequest(AppException):
    """
    Page request cannot be applied.

    Raised by the pagination support layer before any store call when the
    page number is negative, the page size is not positive, or a sort
    property is not exposed by the projection.
    """

    pass


class StoreFailure(AppException):
    """
    Store operation failed.

    Wraps connectivity and query execution errors raised by SQLAlchemy.
    The original error is chained as ``__cause__``. Nothing in this layer
    retries; callers decide whether to.

    Attributes:
        operation: Short name of the failed operation (content, count, save...).
    """

    def __init__(self, message: str, operation: str = "query"):
        self.operation = operation
        super().__init__(message)
