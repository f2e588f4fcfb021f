"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The record store could not read or write data."""


class BulkStatusUpdateError(DomainException):
    """One or more orders in a bulk status change could not be updated.

    Orders that were updated successfully stay updated; ``failures`` maps
    each failed order ID to the reason it failed.
    """

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = dict(failures)
        details = ", ".join(f"{oid} ({reason})" for oid, reason in self.failures.items())
        super().__init__(f"Status update failed for {len(self.failures)} order(s): {details}")

    @property
    def failed_ids(self) -> list[str]:
        return list(self.failures)
