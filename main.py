# =============================================================================
# main.py  —  Entry Point for the Runn MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads environment variables from .env (RUNN_API_KEY, LOG_LEVEL, ...)
#   2. Configures logging to stderr
#   3. Validates the Runn configuration (a missing API key is fatal)
#   4. Starts the FastMCP server on the stdio transport
#
# EXIT STATUS:
#   0 on a clean shutdown, 1 if the configuration is invalid or the
#   transport fails to start.  Errors inside individual tool calls are
#   handled by the tools themselves and never reach this level.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file BEFORE reading any config
load_dotenv()

from runn.config import RunnConfig
from tools.mcp_server import configure_logging, mcp


def main() -> int:
    config = RunnConfig.from_env()
    configure_logging(config.log_level)

    try:
        config.validate()
    except ValueError as e:
        logging.error(f"Invalid configuration: {e}")
        return 1

    logging.info(f"Runn MCP Server running on stdio ({config.base_url})")
    try:
        mcp.run()
    except KeyboardInterrupt:
        logging.info("Shutting down")
    except Exception:
        logging.exception("Fatal error")
        return 1
    return 0


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    sys.exit(main())
