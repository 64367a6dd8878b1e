from sqlalchemy import create_engine

import config
from app_logging import get_logger
from post_repository import PostRepository

logger = get_logger("init_db")

def main():
    engine = create_engine(config.database_url())
    try:
        PostRepository(engine).create_tables_if_not_exist()  # ensure tables exist
    finally:
        engine.dispose()
    logger.info("webz_data schema ensured")

if __name__ == "__main__":
    main()
