#!/usr/bin/env python3
"""
Command line entry point for Kitchen Companion.

    kitchen web            Run the web app
    kitchen interactive    Run the terminal session
"""

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv

from kitchen.data.provider import get_data_provider
from kitchen.data.store import KitchenState

logger = logging.getLogger(__name__)


def configure_logging(log_dir: str = None, level: str = None):
    """
    Set up console and rotating file logging.

    Args:
        log_dir: Directory for app.log (KITCHEN_LOG_DIR, default "logs")
        level: Log level name (KITCHEN_LOG_LEVEL, default "INFO")
    """
    log_dir = log_dir or os.environ.get("KITCHEN_LOG_DIR", "logs")
    level = (level or os.environ.get("KITCHEN_LOG_LEVEL", "INFO")).upper()
    os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            RotatingFileHandler(
                os.path.join(log_dir, "app.log"),
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5
            )
        ]
    )


def main(argv=None):
    """CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="Kitchen Companion")
    parser.add_argument(
        "command",
        choices=["web", "interactive"],
        help="Command to run",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Web server host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", 5000)),
        help="Web server port (default: 5000)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run the web server in debug mode",
    )
    parser.add_argument(
        "--data",
        choices=["sample", "empty"],
        default=None,
        help="Initial data (default: KITCHEN_DATA or sample)",
    )

    args = parser.parse_args(argv)

    configure_logging()
    state = KitchenState(provider=get_data_provider(args.data))

    if args.command == "web":
        from kitchen.web.app import create_app

        logger.info(f"Starting web app on {args.host}:{args.port}")
        create_app(state=state).run(host=args.host, port=args.port, debug=args.debug)

    elif args.command == "interactive":
        from kitchen.interactive import InteractiveSession

        # Keep log lines off the interactive console
        logging.getLogger().handlers = [
            h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)
        ]
        InteractiveSession(state=state).run()


if __name__ == "__main__":
    main()
