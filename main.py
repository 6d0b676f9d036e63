#!/usr/bin/env python3
"""
Main entry point for the IRC connector
"""

import asyncio
import sys

from ircconnector.app import run_connection
from ircconnector.config import ConfigLoader
from ircconnector.errors import ConfigurationError, log_error
from ircconnector.logging_config import LoggerConfigurator
from ircconnector.logs.logger import logger


async def main():
    """Main function"""
    try:
        logger.log_event("app", "start")
        config = ConfigLoader().get_configuration()
        await run_connection(config)
    except ConfigurationError as e:
        log_error("Configuration error", e)
        sys.exit(2)
    except Exception as e:
        log_error("Main application error", e)
        sys.exit(1)
    finally:
        logger.log_event("app", "shutdown")


if __name__ == "__main__":
    LoggerConfigurator().configure()

    # Simple health check mode
    if len(sys.argv) > 1 and sys.argv[1] == "--health-check":
        try:
            loaded = ConfigLoader().get_configuration()
            print(f"✅ Health check passed - {len(loaded.get_connection_uris())} URI(s) configured")
            sys.exit(0)
        except ConfigurationError as e:
            print(f"❌ Health check failed: {e}")
            sys.exit(1)

    asyncio.run(main())
