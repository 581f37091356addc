#!/usr/bin/env python3
"""
Run script for the back-office service
"""

import argparse
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
# Run 'python generate_env.py' to create one.
load_dotenv()

from backoffice import create_app
from backoffice.build import build_database
from backoffice.logger import get_logger

logger = get_logger("backoffice.run")


def parse_arguments():
    parser = argparse.ArgumentParser(description='Manufacturing back-office service')
    parser.add_argument('--build-only', action='store_true',
                        help='Create database tables and exit without starting the server')
    parser.add_argument('--seed', action='store_true', default=False,
                        help='Insert demo products, a customer and a supplier into an empty database')
    parser.add_argument('--no-seed', action='store_false', dest='seed',
                        help='Do not insert demo data (default)')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    app = create_app()
    logger.debug("Starting back-office service...")

    build_database(app, seed=args.seed)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')
    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
