# ============================================================================
# HCHECK - MAIN ENTRY POINT
# ============================================================================
# STATUS: Example - Run the demo app with uvicorn
# PURPOSE: `python -m hcheck`
# CREATED: 18 OCT 2026
# ============================================================================
"""
Runs the demo application.

Usage:
    python -m hcheck --port 8000 --log-level debug
"""

import argparse
import os

import uvicorn

from hcheck.config import get_settings
from hcheck.core import HealthCheckConfigError
from hcheck.demo import create_demo_app
from hcheck.logging import configure_logging, get_logger

logger = get_logger("hcheck")


def main() -> None:
    parser = argparse.ArgumentParser(description="hcheck demo server")
    parser.add_argument("--host", default=os.environ.get("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")))
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"))
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    args = parser.parse_args()

    configure_logging(level=args.log_level, json_output=args.json_logs)

    try:
        settings = get_settings()
    except HealthCheckConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        raise SystemExit(2)

    app = create_demo_app(settings)
    logger.info(f"Starting hcheck demo on {args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
