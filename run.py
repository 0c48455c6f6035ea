#!/usr/bin/env python3
#USE VENV: source venv/bin/activate
"""
Run script for the IT asset registry
"""

import argparse
import os
import sys
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from itassets import create_app
from itassets.build import build_database
from itassets.logger import get_logger

# Run 'python generate_env.py' to create a .env file with a secure SECRET_KEY.

logger = get_logger("itassets.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='IT Asset Registry')
    parser.add_argument('--build-only', action='store_true',
                        help='Create database tables and exit without starting the web server')
    parser.add_argument('--seed-demo-data', action='store_true',
                        help='Insert demo sites, suppliers and assets when the database is empty')
    parser.add_argument('--host', default=os.environ.get('FLASK_HOST', '127.0.0.1'))
    parser.add_argument('--port', type=int, default=int(os.environ.get('FLASK_PORT', '5000')))
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()
    app = create_app()

    logger.debug("Starting IT Asset Registry...")

    with app.app_context():
        build_database(seed_demo=args.seed_demo_data)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    logger.debug(f"Access the API at: http://{args.host}:{args.port}/api")
    app.run(
        host=args.host,
        port=args.port,
        debug=os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on'),
        use_reloader=os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on'),
    )
