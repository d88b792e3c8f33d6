from collections.abc import Iterable

from .models import ValidationError, ValidationResult


class ErrorCollector:
    """
    Accumulates validation errors in detection order.

    Errors are never deduplicated: a field flagged by its own rule and by a
    cross-field rule is reported twice. Once `result()` has been called the
    collector is sealed and refuses further errors.
    """

    def __init__(self):
        self._errors: list[ValidationError] = []
        self._sealed = False

    def __len__(self) -> int:
        return len(self._errors)

    def append(self, error: ValidationError) -> None:
        if self._sealed:
            raise RuntimeError("Cannot add errors to a finalized validation result")
        self._errors.append(error)

    def add(self, key: str, message: str) -> None:
        self.append(ValidationError(key=key, message=message))

    def extend(self, errors: Iterable[ValidationError]) -> None:
        for error in errors:
            self.append(error)

    def result(self) -> ValidationResult:
        self._sealed = True
        return tuple(self._errors)
