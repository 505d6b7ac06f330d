"""
campusnav.core.config - Configuration Management
==================================================

Configuration is loaded from these sources, highest priority first:

    1. Explicit constructor arguments (load_config passes YAML values here)
    2. Environment variables (prefixed with CAMPUSNAV_)
    3. Default values defined in the models below

Architecture Context:
    NavigatorConfig is created once by the bootstrap code and passed down:

        NavigatorConfig
            ├── ServerConfig  → HTTP bind address, startup payloads
            └── StoreConfig   → document store credentials and collection names

    The NavigationDirectory only sees plain values from StoreConfig; it does
    not know whether they came from the environment or a file.

Environment Variables:
    CAMPUSNAV_LOG_LEVEL=DEBUG
    CAMPUSNAV_SERVER__PORT=9000
    CAMPUSNAV_SERVER__CLASSROOM_DATA_PATH=data/classrooms.json
    CAMPUSNAV_STORE__HOST=mongo
    CAMPUSNAV_STORE__USERNAME=navigator
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from campusnav.core.exceptions import ConfigurationError


DEFAULT_CONFIG_FILE = "campusnav.yaml"


# =============================================================================
# Server Configuration
# =============================================================================
# Where the HTTP transport listens and what it loads at startup. The payload
# fields hold raw JSON text; the *_path fields, when set, take precedence and
# are read by campusnav.bootstrap.
# =============================================================================
class ServerConfig(BaseModel):
    """Configuration for the HTTP server and its startup payloads.

    Attributes:
        host: Interface to bind.
        port: TCP port to bind.
        classroom_payload: Inline JSON array of classroom records.
        image_payload: Inline JSON array of image records.
        classroom_data_path: File holding the classroom JSON array.
        image_data_path: File holding the image JSON array.
    """

    host: str = Field(
        default="localhost",
        description="Interface the HTTP server binds to",
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="TCP port the HTTP server binds to",
    )
    classroom_payload: str = Field(
        default="[]",
        description="Inline JSON array of classroom records",
    )
    image_payload: str = Field(
        default="[]",
        description="Inline JSON array of image records",
    )
    classroom_data_path: Optional[str] = Field(
        default=None,
        description="Path to a JSON file of classroom records (overrides classroom_payload)",
    )
    image_data_path: Optional[str] = Field(
        default=None,
        description="Path to a JSON file of image records (overrides image_payload)",
    )


# =============================================================================
# Store Configuration
# =============================================================================
class StoreConfig(BaseModel):
    """Configuration for the document store behind the directory.

    Attributes:
        username: Store user name, if the backend needs credentials.
        password: Store password, if the backend needs credentials.
        host: Store host or container name.
        port: Store port.
        database_name: Database that holds both collections.
        classroom_collection: Collection for classroom records.
        image_collection: Collection for image records.
    """

    username: Optional[str] = Field(default=None, description="Store user name")
    password: Optional[str] = Field(default=None, description="Store password")
    host: str = Field(default="localhost", description="Store host or container name")
    port: int = Field(default=27017, ge=1, le=65535, description="Store port")
    database_name: str = Field(
        default="navigation_data",
        min_length=1,
        description="Database holding the classroom and image collections",
    )
    classroom_collection: str = Field(
        default="classrooms",
        min_length=1,
        description="Collection name for classroom records",
    )
    image_collection: str = Field(
        default="images",
        min_length=1,
        description="Collection name for image records",
    )


# =============================================================================
# Main Configuration
# =============================================================================
# Environment Variable Mapping:
#   CAMPUSNAV_LOG_LEVEL        → config.log_level
#   CAMPUSNAV_SERVER__HOST     → config.server.host  (nested with double underscore)
#   CAMPUSNAV_STORE__PASSWORD  → config.store.password
# =============================================================================
class NavigatorConfig(BaseSettings):
    """Top-level configuration for campusnav.

    Attributes:
        environment: Deployment environment.
        log_level: Logging level name.
        log_format: "console" for human-readable logs, "json" for one JSON
            object per line.
        server: HTTP server configuration (see ServerConfig).
        store: Document store configuration (see StoreConfig).

    Example:
        >>> config = NavigatorConfig(
        ...     log_level="DEBUG",
        ...     server=ServerConfig(port=9000),
        ... )
    """

    environment: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' or 'json'",
    )

    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="HTTP server configuration",
    )
    store: StoreConfig = Field(
        default_factory=StoreConfig,
        description="Document store configuration",
    )

    model_config = {
        "env_prefix": "CAMPUSNAV_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
    }


# =============================================================================
# Configuration Loader
# =============================================================================
def load_config(path: Optional[str] = None) -> NavigatorConfig:
    """Load configuration from a YAML file and/or environment variables.

    Args:
        path: Path to a YAML configuration file. If None, ``campusnav.yaml``
            in the current directory is used when it exists; otherwise only
            defaults and environment variables apply.

    Returns:
        A fully validated NavigatorConfig instance.

    Raises:
        FileNotFoundError: If an explicit path is provided but doesn't exist.
        ConfigurationError: If the YAML file is malformed or its top level
            is not a mapping.
    """
    if path is None:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            path = str(default_path)

    yaml_data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {path}. "
                f"Create one or use CAMPUSNAV_* environment variables."
            )

        with open(config_path, encoding="utf-8") as f:
            try:
                raw_data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    message=f"Invalid YAML in configuration file: {exc}",
                    error_code="CONFIG_YAML_INVALID",
                    details={"path": str(config_path)},
                ) from exc

        if raw_data is None:
            raw_data = {}
        if not isinstance(raw_data, dict):
            raise ConfigurationError(
                message="Configuration file must contain a mapping at the top level",
                error_code="CONFIG_YAML_INVALID",
                details={"path": str(config_path), "found": type(raw_data).__name__},
            )
        yaml_data = raw_data

    return NavigatorConfig(**yaml_data)


def get_default_config() -> NavigatorConfig:
    """Create a NavigatorConfig from defaults and environment variables."""
    return NavigatorConfig()
