"""Ordered validation passes run before records reach the store."""

from collections.abc import Callable, Iterable
from typing import TypeVar

RecordT = TypeVar("RecordT")

# A validator inspects or normalizes a record in place, raising ValidationError to reject it
Validator = Callable[[RecordT], None]


def run_validators(record: RecordT, validators: Iterable[Validator]) -> None:
    """Run validators in order. The first error raised stops the run."""
    for validate in validators:
        validate(record)


class ValidatorChain:
    """Mixin resolving validator names to bound methods, keeping each order a plain constant."""

    def validators(self, names: Iterable[str]) -> list[Validator]:
        return [getattr(self, name) for name in names]

    def validate(self, record, names: Iterable[str]) -> None:
        """Run the named validators, discarding partial changes to ``record`` if one fails."""
        try:
            run_validators(record, self.validators(names))
        except Exception:
            self.discard(record)
            raise

    def discard(self, record) -> None:
        """Undo unsaved changes to ``record``. Chains wrapping a store override this."""
