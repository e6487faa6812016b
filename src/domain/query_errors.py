"""
Query errors - Storage failures classified before they reach the domain.

Repository adapters never let driver exceptions (psycopg, pool timeouts, ...)
escape on their own. Every failure is wrapped in a ``QueryError`` that records:

- which logical query ran
- the classified condition (``QueryErrorKind``), or SYSTEMIC for anything
  the adapter does not interpret
- the original driver message, for logs and traces
- the call site that produced the error

Callers distinguish "not found" from "storage is down" by ``err.kind`` or by
catching the matching subclass, never by parsing the message text.
"""

import traceback
from enum import Enum


class QueryErrorKind(Enum):
    """Closed taxonomy of classified storage conditions."""

    USER_NOT_FOUND = "no user found"
    TODO_NOT_FOUND = "no todo found"
    INSERT_FAILED = "insert command operation"
    UPDATE_FAILED = "update command operation"
    DELETE_FAILED = "delete command operation"
    NO_MORE_ROWS = "no more rows available"
    SYSTEMIC = "systemic storage failure"


class QueryError(Exception):
    """
    A repository failure carrying its classification and original message.

    ``str(err)`` is the compact rendering; ``err.verbose()`` adds the call
    site the error was raised from.
    """

    def __init__(
        self,
        query: str,
        kind: QueryErrorKind,
        original_message: str = "",
        cause: BaseException | None = None,
        frame: traceback.FrameSummary | None = None,
    ) -> None:
        self.query = query
        self.kind = kind
        self.original_message = original_message
        self.cause = cause
        self.frame = frame
        super().__init__(str(self))

    @property
    def is_not_found(self) -> bool:
        return self.kind in (QueryErrorKind.USER_NOT_FOUND, QueryErrorKind.TODO_NOT_FOUND)

    @property
    def classified(self) -> str:
        """Short label for the classified condition."""
        if self.kind is QueryErrorKind.SYSTEMIC and self.cause is not None:
            return f"{type(self.cause).__name__}: {self.cause}"
        return self.kind.value

    def __str__(self) -> str:
        return (
            f"error executing query {self.query!r}: "
            f"[{self.classified}] - underlying error [{self.original_message}]"
        )

    def verbose(self) -> str:
        """Compact rendering followed by the call-site provenance."""
        if self.frame is None:
            return str(self)
        return f"{self}\n    at {self.frame.filename}:{self.frame.lineno} in {self.frame.name}"


class NotFoundError(QueryError):
    """No record matched the lookup key."""


class UserNotFound(NotFoundError):
    """No user associated with the id or email."""


class TodoNotFound(NotFoundError):
    """No todo associated with the todo id or user id."""


class InsertFailed(QueryError):
    """Insert reported success but affected no rows."""


class UpdateFailed(QueryError):
    """Update affected no rows."""


class DeleteFailed(QueryError):
    """Delete affected no rows."""


class NoMoreRows(QueryError):
    """No rows left to read."""


class SystemicQueryError(QueryError):
    """Connectivity, timeout, constraint or any other uninterpreted failure."""


_ERROR_TYPES: dict[QueryErrorKind, type[QueryError]] = {
    QueryErrorKind.USER_NOT_FOUND: UserNotFound,
    QueryErrorKind.TODO_NOT_FOUND: TodoNotFound,
    QueryErrorKind.INSERT_FAILED: InsertFailed,
    QueryErrorKind.UPDATE_FAILED: UpdateFailed,
    QueryErrorKind.DELETE_FAILED: DeleteFailed,
    QueryErrorKind.NO_MORE_ROWS: NoMoreRows,
    QueryErrorKind.SYSTEMIC: SystemicQueryError,
}


def new_query_error(
    query: str,
    classified: QueryErrorKind | BaseException,
    original_message: str = "",
    stacklevel: int = 1,
) -> QueryError:
    """
    Build the wrapped error for a failed query.

    Args:
        query: Logical name of the query or operation that ran
        classified: A taxonomy member, or the raw driver exception which is
            then carried as an opaque SYSTEMIC cause
        original_message: The underlying error text, kept for diagnostics
        stacklevel: Which caller to record, like ``warnings.warn``; helpers
            that build errors on behalf of their caller pass 2

    Returns:
        QueryError subclass matching the classification, with the caller's
        frame recorded as provenance
    """
    # extract_stack lists oldest first, so [0] is the requested caller
    frame = traceback.extract_stack(limit=stacklevel + 1)[0]

    if isinstance(classified, QueryErrorKind):
        kind, cause = classified, None
    else:
        kind, cause = QueryErrorKind.SYSTEMIC, classified

    return _ERROR_TYPES[kind](query, kind, original_message, cause=cause, frame=frame)
