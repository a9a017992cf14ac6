#!/usr/bin/env python3
"""Entry point for the Catpoint security system."""

import argparse
import logging
import os
import sys
import traceback

from catpoint.config_manager import ConfigManager
from catpoint.exceptions import CatpointError
from catpoint.logging_config import get_logger, setup_logging
from catpoint.services.image_service import create_image_service
from catpoint.services.repository import create_repository
from catpoint.services.security_service import SecurityService
from catpoint.web.app import SecurityWebApp


def main(argv=None):
    """Main entry point for the security system."""
    parser = argparse.ArgumentParser(description="Catpoint security control API")
    parser.add_argument("--config", default=None, help="Path to the JSON configuration file")
    args = parser.parse_args(argv)

    config_manager = ConfigManager(args.config)
    config = config_manager.get_config()

    logging_manager = setup_logging(config.log_level, config.log_dir)
    config_manager.register_change_callback(
        lambda new_config: logging_manager.set_log_level(
            getattr(logging, new_config.log_level.upper(), logging.INFO)
        )
    )
    logger = get_logger("start_security")
    logger.info("Starting Catpoint security system")
    logger.info(f"Python version: {sys.version}")
    logger.info(f"Working directory: {os.getcwd()}")

    if not config_manager.validate_config():
        logger.error(f"Invalid configuration in {config_manager.config_path}")
        return 1

    try:
        repository = create_repository(config)
        image_service = create_image_service(config)
        security_service = SecurityService(repository, image_service)

        web_app = SecurityWebApp(security_service, config.max_image_size_mb)
        web_app.run(host=config.web_host, port=config.web_port)
        return 0

    except CatpointError as e:
        logger.error(f"Security system failed: {e}")
        traceback.print_exc()
        return 1
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
        return 0


if __name__ == "__main__":
    sys.exit(main())
