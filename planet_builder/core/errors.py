from dataclasses import dataclass, field
from typing import Any


class ValidationError(ValueError):
    """Raised when a proposed parameter set violates one or more constraints.

    `errors` keeps every violated constraint, in the order they were checked.
    """
    def __init__(self, errors, prefix: str = "Invalid parameters"):
        self.errors = tuple(errors)
        if not self.errors:
            raise ValueError("`ValidationError` requires at least one error message.")
        self.prefix = prefix
        super().__init__(f"{prefix}: {', '.join(self.errors)}")


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def __bool__(self):
        return self.is_valid


@dataclass(frozen=True)
class StateResult:
    """Outcome of building a state: either `state` is set, or `errors` is non-empty."""
    state: Any = None
    errors: tuple[str, ...] = field(default=())
    prefix: str = "Invalid parameters"

    @property
    def ok(self) -> bool:
        return self.state is not None and not self.errors

    def unwrap(self):
        if not self.ok:
            raise ValidationError(self.errors, self.prefix)
        return self.state
