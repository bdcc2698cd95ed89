"""Errors that abort a generation run."""

from typing import Optional

VALID_ERROR_CODES = {
    "UNMAPPABLE_TYPE",
    "DUPLICATE_OR_MISSING_API_FLAG",
    "UNRESOLVED_FUNCTION_REFERENCE",
    "UNKNOWN_ENUM_REFERENCE",
    "INCONSISTENT_FUNCTION_RECORD",
    "UNKNOWN_INPUT_API",
    "INVALID_RECORD",
    "UNSTABLE_OVERLOAD_RULES",
}


class GenerationError(Exception):
    def __init__(self, code: str, message: str, suggestion: Optional[str] = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown generation error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
