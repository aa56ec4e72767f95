"""
Pre-persist hooks run on candidate records before they are written.

Validators inspect the full candidate record and report field errors.
Before-change hooks derive values in place. Both receive the whole record,
so rules that depend on sibling fields need no extra plumbing.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List

from app.core.exceptions import SchemaValidationError

Record = Dict[str, Any]


@dataclass
class ValidationResult:
    """Field name to error message. Empty means the record is valid."""

    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors[field_name] = message

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.update(other.errors)
        return self


Validator = Callable[[Record], ValidationResult]
BeforeChangeHook = Callable[[Record, str], None]


class HookOperation:
    """Write operation passed to before-change hooks."""

    CREATE = "create"
    UPDATE = "update"


def run_hooks(
    collection: str,
    record: Record,
    operation: str,
    validators: Iterable[Validator] = (),
    before_change: Iterable[BeforeChangeHook] = (),
) -> Record:
    """
    Validate then derive, in that order.

    Args:
        collection: Collection slug, used in the error
        record: Candidate record, mutated by before-change hooks
        operation: HookOperation.CREATE or HookOperation.UPDATE
        validators: Validators to run
        before_change: Hooks to run once validation passed

    Returns:
        The (possibly modified) record

    Raises:
        SchemaValidationError: If any validator reports an error
    """
    result = ValidationResult()
    for validator in validators:
        result.merge(validator(record))

    if not result.is_valid:
        raise SchemaValidationError(collection, result.errors)

    for hook in before_change:
        hook(record, operation)

    return record


@dataclass
class CollectionHooks:
    """Hooks attached to one collection."""

    validators: List[Validator] = field(default_factory=list)
    before_change: List[BeforeChangeHook] = field(default_factory=list)

    def apply(self, collection: str, record: Record, operation: str) -> Record:
        return run_hooks(
            collection,
            record,
            operation,
            validators=self.validators,
            before_change=self.before_change,
        )
