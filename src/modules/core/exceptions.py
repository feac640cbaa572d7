"""Error taxonomy shared by every catalog module.

Exception hierarchy::

    DomainError (base, client-correctable)
    ├── ValidationFailed       400  bad input shape or values
    ├── InvalidIdentifier      400  malformed identifier
    ├── EntityNotFound         404  referenced entity absent
    └── DomainRuleViolation    400  stock / discount bound violations

    RepositoryError                 infrastructure failure (500, or 503 when
                                    the store is unreachable)

Each class carries a stable ``kind`` tag, the HTTP ``status_code`` the API
layer answers with and a short ``title`` used as the ``error`` field of the
JSON body.  The API layer never inspects exception messages.
"""

from __future__ import annotations

from typing import Any, Dict


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    kind = "domain_error"
    status_code = 400
    title = "Domain error"

    def extra(self) -> Dict[str, Any]:
        """Additional fields merged into the JSON error body."""
        return {}


class ValidationFailed(DomainError):
    kind = "validation_error"
    status_code = 400
    title = "Invalid data"


class InvalidIdentifier(DomainError):
    kind = "invalid_id"
    status_code = 400
    title = "Invalid identifier"


class EntityNotFound(DomainError):
    kind = "not_found"
    status_code = 404
    title = "Not found"


class DomainRuleViolation(DomainError):
    kind = "domain_rule"
    status_code = 400
    title = "Invalid operation"


class RepositoryError(Exception):
    """A storage-layer failure (connectivity, constraint violation, ...).

    Not a ``DomainError``, so callers can tell "bad input" apart from
    "infrastructure failure".  ``unavailable`` is set when the store could
    not be reached at all.
    """

    kind = "repository_error"
    title = "Storage failure"

    def __init__(self, message: str, *, unavailable: bool = False) -> None:
        super().__init__(message)
        self.unavailable = unavailable

    @property
    def status_code(self) -> int:
        return 503 if self.unavailable else 500
