"""
Outliner Backend — Exception Hierarchy
========================================

What:  Application-specific exceptions raised by the service layer.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       HTTP 500 responses shaped {"error": <message>}.
Who:   Raised by OutlineService; caught by the handlers in main.py.

Exception Hierarchy:
    OutlinerError (base)
    └── StoreOperationError   → 500 {"error": <store message>}

There is one failure kind on purpose: a missing row, a constraint violation
and a dropped connection all surface the same way, with the store's own text.
"""

from typing import Any, Dict, Optional


class OutlinerError(Exception):
    """
    Base exception for all Outliner application errors.

    Attributes:
        message:  Error description returned to the client
        context:  Extra debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class StoreOperationError(OutlinerError):
    """
    Raised when a statement against the relational store fails.

    What:    Insert, update, delete or select failed in the store or driver.
    When:    Foreign key or NOT NULL violation, missing table, lost connection.
    HTTP:    500 Internal Server Error

    The message is the driver's error text verbatim, e.g.
    'null value in column "title" violates not-null constraint'.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation

    @classmethod
    def from_exception(cls, exc: Exception, operation: Optional[str] = None) -> "StoreOperationError":
        """
        Wrap a SQLAlchemy (or driver) exception.

        SQLAlchemy's DBAPIError keeps the driver exception on `.orig`; its
        text is what the client sees. Other errors use their own str().
        """
        original = getattr(exc, "orig", None) or exc
        message = str(original) or type(original).__name__
        return cls(
            message=message,
            operation=operation,
            context={"error_type": type(exc).__name__},
        )
