"""
campusnav.core - Foundation Layer
=================================

Configuration, enums, data models, exceptions and logging setup. Nothing in
``core`` performs I/O against the document store, so these types are safe to
import from anywhere in the package.

Dependency Rule:
    core/ depends on NOTHING else in the campusnav package.
"""

from campusnav.core.config import NavigatorConfig, ServerConfig, StoreConfig
from campusnav.core.enums import DirectoryState, PayloadKind
from campusnav.core.exceptions import (
    ConfigurationError,
    ConnectivityError,
    NavigatorError,
    NotFoundError,
    NotInitializedError,
    ParseError,
    PersistenceError,
)
from campusnav.core.models import (
    ClassroomRecord,
    ImageRecord,
    ResolvedClassroom,
    serialize_classroom_list,
)

__all__ = [
    # Config
    "NavigatorConfig",
    "ServerConfig",
    "StoreConfig",
    # Enums
    "DirectoryState",
    "PayloadKind",
    # Exceptions
    "NavigatorError",
    "ConfigurationError",
    "ConnectivityError",
    "ParseError",
    "PersistenceError",
    "NotFoundError",
    "NotInitializedError",
    # Models
    "ImageRecord",
    "ClassroomRecord",
    "ResolvedClassroom",
    "serialize_classroom_list",
]
