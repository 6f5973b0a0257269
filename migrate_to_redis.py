"""
Copy the JSON-file portfolio into the Redis key used by the redis store.

Usage:
    python migrate_to_redis.py
    python migrate_to_redis.py --data-file data/portfolio.json --redis-url redis://localhost:6379/0
    python migrate_to_redis.py --log-level DEBUG
"""

import argparse
import logging
import os
import sys

from stocktable import config
from stocktable.errors import StoreUnavailableError
from stocktable.logging_setup import setup_logging
from stocktable.store import JsonFileStore, RedisStore


def migrate(source: JsonFileStore, target: RedisStore) -> int:
    """Write every record from ``source`` into ``target``. Returns the verified count."""
    records = source.load()
    logging.info(f"Found {len(records)} portfolio items to migrate")

    target.save(records)
    logging.info(f"Migration completed. Data is stored in Redis under key: {target.key}")

    stored = target.load()
    logging.info(f"Verification: {len(stored)} items stored in Redis")
    return len(stored)


def main():
    parser = argparse.ArgumentParser(description='Migrate portfolio data from the JSON file to Redis')
    parser.add_argument('--data-file', default=config.DATA_FILE)
    parser.add_argument('--redis-url', default=config.REDIS_URL)
    parser.add_argument('--redis-key', default=config.REDIS_KEY)
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    args = parser.parse_args()

    setup_logging(args.log_level)
    logging.info("Starting migration from portfolio.json to Redis...")

    if not os.path.exists(args.data_file):
        logging.info(f"No portfolio file found at {args.data_file}, skipping migration.")
        return

    try:
        migrate(JsonFileStore(args.data_file), RedisStore.from_url(args.redis_url, key=args.redis_key))
    except StoreUnavailableError as e:
        logging.error(f"Migration failed: {e}")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(2)


if __name__ == '__main__':
    main()
