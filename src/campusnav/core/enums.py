"""
campusnav.core.enums - Type-Safe Enumerations
===============================================

Enums inherit from both ``str`` and ``Enum`` so they serialize to plain
strings in JSON and compare equal to their string values.
"""

from enum import Enum


# =============================================================================
# Directory State
# =============================================================================
# The NavigationDirectory has exactly two states:
#
#   UNINITIALIZED ──initialize()──→ READY ──initialize()──→ READY
#
# There is no teardown state; shutdown belongs to the process lifecycle.
# =============================================================================
class DirectoryState(str, Enum):
    """Lifecycle state of a NavigationDirectory.

    Usage:
        >>> DirectoryState.READY == "ready"
        True
    """

    UNINITIALIZED = "uninitialized"
    READY = "ready"


class PayloadKind(str, Enum):
    """The two record sets handed to the directory at startup."""

    CLASSROOMS = "classrooms"
    IMAGES = "images"
