import argparse
import sys

from sqlalchemy import create_engine

import config
from app_logging import get_logger
from post_repository import PostRepository
from webz_fetcher import WebzApiError, WebzFetcher

logger = get_logger("run_harvest")

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Fetch Webz.io news posts into the database")
    parser.add_argument("query", help="search query, e.g. 'technology'")
    parser.add_argument("--delay", type=float, default=None,
                        help="seconds to wait between pages (default: WEBZ_REQUEST_DELAY or 1.0)")
    return parser.parse_args(argv)

def report(retrieved_count, total_count):
    logger.info(f"Retrieved {retrieved_count} of {total_count} posts")

def main(argv=None):
    args = parse_args(argv)
    try:
        token = config.api_token()
    except config.ConfigError as e:
        logger.error(str(e))
        return 1

    engine = create_engine(config.database_url())
    repository = PostRepository(engine)
    fetcher = WebzFetcher(
        token,
        config.api_base_url(),
        repository,
        request_delay=args.delay if args.delay is not None else config.request_delay(),
        timeout=config.request_timeout(),
    )

    logger.info(f"Fetching Webz.io posts for '{args.query}' …")
    try:
        fetcher.fetch_posts(args.query, report)
        logger.info(f"{repository.count_posts()} posts stored in total")
    except WebzApiError as e:
        logger.error(f"Webz.io request failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"Harvest failed: {e}")
        return 1
    finally:
        fetcher.close()
        engine.dispose()

    logger.info("Harvest complete")
    return 0

if __name__ == "__main__":
    sys.exit(main())
