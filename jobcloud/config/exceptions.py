"""Custom exceptions for configuration management."""

from typing import List, Optional

from pydantic import ValidationError


class ConfigurationError(Exception):
    """
    Exception raised when configuration validation fails.

    Stores every validation error together with suggestions for fixing them
    and renders both as a numbered, human-readable message.
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
    def from_validation_error(cls, error: ValidationError) -> "ConfigurationError":
        """Translate a pydantic ValidationError into readable messages."""
        messages = []
        for detail in error.errors():
            field_path = " -> ".join(str(loc) for loc in detail["loc"]) or "config"
            error_type = detail["type"]

            if error_type == "missing":
                messages.append(f"Missing required field: {field_path}")
            elif error_type in ("string_type", "int_type", "bool_type", "list_type"):
                expected_type = error_type.replace("_type", "")
                messages.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {detail.get('input')!r}"
                )
            elif "enum" in error_type:
                messages.append(f"Invalid value for '{field_path}': {detail['msg']}")
            else:
                messages.append(f"{field_path}: {detail['msg']}")

        return cls(
            "Configuration validation failed",
            errors=messages,
            suggestions=[
                "Review config.example.yaml for the expected format",
                "Verify field types match the expected schema",
            ],
        )

    def _format_message(self) -> str:
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
