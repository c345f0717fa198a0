"""
Entry point for serving the API.

Usage:
    python -m api

Reads DB, SECRET_KEY and PORT (default 8080) from the environment.
Creates any missing indexes before serving, so usernames are unique
from the first signup. Exits with status 1 if the configuration is
incomplete or the first database round-trip fails.
"""

import sys

import uvicorn
from pymongo.errors import PyMongoError

from api.dependencies import close_db, get_config, get_db
from api.logging_config import logger
from api.main import app


def main() -> int:
    """Check configuration and connectivity, then serve until terminated."""
    try:
        config = get_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        db = get_db()
        db.ping()
        # signup conflicts rely on the unique username index
        indexes = db.check_and_create_indexes()
    except PyMongoError as e:
        logger.error(f"MongoDB connection error: {e}")
        close_db()
        return 1

    if indexes["created"]:
        logger.info(f"Created indexes: {', '.join(indexes['created'])}")

    logger.info(f"Connected to MongoDB, serving on {config.api_host}:{config.api_port}")
    # uvicorn turns SIGINT/SIGTERM into lifespan shutdown, which closes the client
    uvicorn.run(app, host=config.api_host, port=config.api_port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
