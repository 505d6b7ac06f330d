"""
campusnav.server - Process Entry Point
========================================

``campusnav`` console script: load configuration, configure logging, serve
the HTTP app with uvicorn.

    $ CAMPUSNAV_SERVER__CLASSROOM_DATA_PATH=data/classrooms.json \\
      CAMPUSNAV_SERVER__IMAGE_DATA_PATH=data/images.json \\
      campusnav --config campusnav.yaml
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

import uvicorn
from pydantic import ValidationError

from campusnav.api.app import create_app
from campusnav.core.config import NavigatorConfig, ServerConfig, load_config
from campusnav.core.exceptions import ConfigurationError
from campusnav.core.logging_setup import configure_logging


def apply_overrides(
    config: NavigatorConfig,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> NavigatorConfig:
    """Return a copy of ``config`` with the command-line server overrides applied.

    The overridden server section is re-validated, so the same bounds apply
    as for values from the environment or YAML.

    Raises:
        ConfigurationError: If an override is out of range.
    """
    overrides = {key: value for key, value in (("host", host), ("port", port)) if value is not None}
    if not overrides:
        return config

    try:
        server = ServerConfig.model_validate({**config.server.model_dump(), **overrides})
    except ValidationError as exc:
        raise ConfigurationError(
            message=f"Invalid server override: {exc.errors()[0]['msg']}",
            error_code="CONFIG_OVERRIDE_INVALID",
            details={"overrides": overrides},
        ) from exc
    return config.model_copy(update={"server": server})


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="campusnav", description="Campus navigation directory server")
    parser.add_argument("--config", default=None, help="YAML configuration file (default: ./campusnav.yaml if present)")
    parser.add_argument("--host", default=None, help="Override server.host")
    parser.add_argument("--port", type=int, default=None, help="Override server.port")
    args = parser.parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), host=args.host, port=args.port)
    except ConfigurationError as exc:
        parser.error(exc.message)

    configure_logging(config.log_level, config.log_format)

    app = create_app(config=config)
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


if __name__ == "__main__":
    main()
