"""
campusnav.core.exceptions - Custom Exception Hierarchy
========================================================

Every failure the navigation directory can report is one of the types below.
Each carries a human-readable message, a machine-readable error code and a
``details`` dict, so the HTTP layer can turn any of them into a response body
without knowing which component raised it.

Exception Hierarchy:
    NavigatorError (base)
        ├── ConfigurationError   - Invalid config, unreadable payload files
        ├── ConnectivityError    - Document store unreachable
        ├── ParseError           - Malformed classroom/image payload
        ├── PersistenceError     - Store read/write failed after connecting
        ├── NotFoundError        - Classroom or its image set is absent
        └── NotInitializedError  - Read before the first successful initialize

Propagation:
    NavigationDirectory raises
        → DirectoryService passes it through unchanged
        → HTTP layer maps it to 404 with ``to_dict()`` as the reason

No component retries. Retry/backoff, if wanted, belongs to whoever runs the
process.

Usage:
    >>> from campusnav.core.exceptions import NotFoundError
    >>> raise NotFoundError(subject="classroom", details={"name": "UK3 104"})
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# Base Exception
# =============================================================================
# Catch NavigatorError to handle every campusnav failure in one place:
#
#   try:
#       resolved = await service.get_classroom(name)
#   except NavigatorError as e:
#       logger.warning(e.message, error_code=e.error_code, details=e.details)
# =============================================================================
class NavigatorError(Exception):
    """Base exception for all campusnav errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code, UPPER_SNAKE_CASE.
        details: Additional debugging context (collection names, record
            keys, payload kind, ...).
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize this exception to a dictionary.

        Used for structured logging and for the HTTP error body.

        Returns:
            Dictionary with error_type, message, error_code, and details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Error
# =============================================================================
# Raised while the process is being set up: bad YAML, a payload file that
# does not exist. The process must not start serving after one of these.
# =============================================================================
class ConfigurationError(NavigatorError):
    """Raised when configuration or startup input is invalid or missing.

    Example:
        >>> raise ConfigurationError(
        ...     message="Classroom data file not found",
        ...     error_code="PAYLOAD_FILE_MISSING",
        ...     details={"path": "data/classrooms.json"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Connectivity Error
# =============================================================================
class ConnectivityError(NavigatorError):
    """Raised when the document store cannot be reached.

    Fatal at startup (the liveness probe runs before any write). At query
    time it surfaces to the caller like every other error.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "STORE_UNREACHABLE",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Parse Error
# =============================================================================
# Raised by initialize() when a classroom or image payload is not a JSON
# array of well-formed records. ``payload`` names which of the two failed.
# =============================================================================
class ParseError(NavigatorError):
    """Raised when an input payload is not well-formed.

    Attributes:
        payload: Which payload failed to parse ("classrooms" or "images").

    Example:
        >>> raise ParseError(
        ...     message="Record 2 is missing field 'image_name'",
        ...     payload="images",
        ... )
    """

    def __init__(
        self,
        message: str,
        payload: str,
        error_code: str = "PARSE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["payload"] = payload

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.payload = payload


# =============================================================================
# Persistence Error
# =============================================================================
class PersistenceError(NavigatorError):
    """Raised when a store operation fails after connectivity was established.

    Also raised by ``replace_all`` when a record fails validation (empty or
    duplicate key); in that case the store is left untouched.

    Attributes:
        collection: The collection the failing operation targeted.
    """

    def __init__(
        self,
        message: str,
        collection: str,
        error_code: str = "PERSISTENCE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["collection"] = collection

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.collection = collection


# =============================================================================
# Not Found Error
# =============================================================================
# ``subject`` is "classroom" when no classroom has the requested name, and
# "images" when a classroom references images but none of them exist.
# =============================================================================
class NotFoundError(NavigatorError):
    """Raised when a classroom or its whole image set is absent.

    Attributes:
        subject: What was not found, "classroom" or "images".

    Example:
        >>> err = NotFoundError(subject="images")
        >>> err.message
        'No images found'
    """

    def __init__(
        self,
        subject: str,
        message: Optional[str] = None,
        error_code: str = "NOT_FOUND",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["subject"] = subject

        if message is None:
            message = (
                "No images found" if subject == "images" else f"{subject.capitalize()} not found"
            )

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.subject = subject


# =============================================================================
# Not Initialized Error
# =============================================================================
class NotInitializedError(NavigatorError):
    """Raised when a read is attempted before the first successful initialize."""

    def __init__(
        self,
        message: str = "Navigation directory has not been initialized",
        error_code: str = "NOT_INITIALIZED",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)
