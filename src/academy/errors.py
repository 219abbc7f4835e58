"""Error kinds raised by academy command handlers.

Missing records surface as ``protean.exceptions.ObjectNotFoundError`` and bad
input as ``protean.exceptions.ValidationError``; the two kinds below cover
uniqueness violations and ownership checks. All of them carry a
``{field: [message]}`` dict in ``messages``.
"""

from contextlib import contextmanager

from protean.exceptions import InvalidOperationError, TransactionError, ValidationError


class ConflictError(InvalidOperationError):
    """A uniqueness rule would be violated (duplicate review, enrollment, email)."""


class ForbiddenError(InvalidOperationError):
    """The acting user does not own the record being changed."""


@contextmanager
def unique_index_as_conflict(index, messages):
    """Re-raise a violation of the unique ``index`` as ``ConflictError(messages)``.

    The memory provider reports a duplicate key on ``repository.add`` as a
    ``ValidationError`` keyed by the index's joined field names.
    """
    try:
        yield
    except ValidationError as exc:
        if isinstance(exc.messages, dict) and "_".join(index.fields) in exc.messages:
            raise ConflictError(messages) from exc
        raise


def is_unique_violation(exc):
    """True when a failed commit was rejected by a database unique constraint."""
    if not isinstance(exc, TransactionError):
        return False
    return (exc.extra_info or {}).get("original_exception") in ("IntegrityError", "UniqueViolation")
