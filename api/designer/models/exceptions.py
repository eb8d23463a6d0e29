"""Custom exception classes for the AI Designer.

The pipeline distinguishes three failure kinds, each recovered at a
different tier:

- ``GenerationError``: no usable specification from the backend; recovered
  by substituting the fallback design.
- ``ElementRenderError``: one element could not be built; recovered by
  skipping that element.
- ``CriticalError``: every fallback tier failed; surfaced to the user.
"""

from typing import Dict, Any, Optional


class DesignerBaseException(Exception):
    """Base exception for all AI Designer errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class GenerationError(DesignerBaseException):
    """Raised when no structurally valid design could be obtained."""

    MISSING_CREDENTIALS = "missing_credentials"
    BACKEND_FAILURE = "backend_failure"
    MALFORMED_OUTPUT = "malformed_output"

    def __init__(self,
                 message: str,
                 reason: str = BACKEND_FAILURE,
                 status_code: Optional[int] = None,
                 model: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.reason = reason
        self.status_code = status_code
        self.model = model
        generation_details = details or {}
        generation_details["reason"] = reason
        if status_code is not None:
            generation_details["status_code"] = status_code
        if model:
            generation_details["model"] = model
        super().__init__(message, generation_details)


class ElementRenderError(DesignerBaseException):
    """Raised when a single design element cannot be turned into a node."""

    def __init__(self,
                 element_name: str,
                 element_type: str,
                 cause: Optional[BaseException] = None):
        self.element_name = element_name
        self.element_type = element_type
        self.cause = cause
        message = f"Failed to create {element_type} element '{element_name}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, {"element_name": element_name, "element_type": element_type})


class CriticalError(DesignerBaseException):
    """Raised when even the last-resort fallback could not be rendered."""

    def __init__(self, message: str, prompt_length: Optional[int] = None):
        details = {}
        if prompt_length is not None:
            details["prompt_length"] = prompt_length
        super().__init__(message, details)


class FontUnavailableError(DesignerBaseException):
    """Raised by a host when a requested font cannot be loaded."""

    def __init__(self, family: str, style: str):
        self.family = family
        self.style = style
        super().__init__(f"Font '{family} {style}' is not available",
                         {"family": family, "style": style})
