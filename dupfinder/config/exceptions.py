"""Custom exceptions for configuration management."""

from typing import List, Optional

from pydantic import ValidationError


class ConfigurationError(Exception):
    """
    Exception raised when a match configuration or config file is invalid.

    Collects every validation problem found in one pass so the caller can
    report them together instead of fixing them one at a time.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: List of specific validation errors
            suggestions: List of helpful suggestions to fix the errors
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    @classmethod
    def from_validation_error(
        cls,
        message: str,
        error: ValidationError,
        suggestions: Optional[List[str]] = None,
    ) -> "ConfigurationError":
        """
        Build a ConfigurationError from a pydantic ValidationError.

        Each pydantic error becomes one line of the form
        ``"<field path>: <reason>"``.

        Args:
            message: Primary error message
            error: The pydantic validation error to translate
            suggestions: Optional suggestions to attach

        Returns:
            ConfigurationError listing every failing field
        """
        errors = []
        for detail in error.errors():
            field_path = " -> ".join(str(loc) for loc in detail["loc"]) or "configuration"
            error_type = detail["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type == "enum":
                errors.append(f"Invalid value for '{field_path}': {detail['msg']}")
            elif error_type in ("int_type", "int_parsing", "bool_type", "bool_parsing"):
                expected = error_type.split("_")[0]
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected}, "
                    f"got {detail.get('input')!r}"
                )
            else:
                errors.append(f"{field_path}: {detail['msg']}")

        return cls(message, errors=errors, suggestions=suggestions)

    def _format_message(self) -> str:
        """Format the error message with all errors and suggestions."""
        parts = [self.message]

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)


class CandidateLoadError(Exception):
    """Raised when a candidate file cannot be read or parsed."""
