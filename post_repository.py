import datetime
import dateutil.parser
import pytz
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from app_logging import get_logger
from models import Base, Post, Thread, Category, Entity

UTC = pytz.utc
ENTITY_TYPES = (
    ("persons", "person"),
    ("organizations", "organization"),
    ("locations", "location"),
)

logger = get_logger("PostRepository")


def parse_timestamp(raw):
    """ISO string from the API -> aware UTC datetime (None when missing)."""
    if not raw:
        return None
    if isinstance(raw, datetime.datetime):
        ts = raw
    else:
        ts = dateutil.parser.parse(raw)
    if ts.tzinfo is None:
        return UTC.localize(ts)
    return ts.astimezone(UTC)


class PostRepository:
    """Persists Webz.io posts and their thread, categories and entities."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_tables_if_not_exist(self) -> None:
        logger.info("Creating database tables if they don't exist")
        try:
            Base.metadata.create_all(self.engine)
        except Exception:
            logger.exception("Error creating database tables")
            raise
        logger.info("Database tables ensured")

    def save_posts(self, posts: list[dict]) -> int:
        """
        Insert the posts that are not stored yet, all in one transaction.

        Returns the number of newly inserted posts. Any failure rolls back
        the whole batch and is re-raised.
        """
        saved = 0
        with Session(self.engine) as ssn:
            try:
                for post in posts:
                    if ssn.get(Post, post["uuid"]) is not None:
                        logger.debug(f"Post {post['uuid']} already exists, skipping")
                        continue
                    self._add_post(ssn, post)
                    ssn.flush()
                    saved += 1
                ssn.commit()
            except Exception:
                ssn.rollback()
                logger.exception("Error saving posts to database")
                raise
        return saved

    def count_posts(self) -> int:
        with Session(self.engine) as ssn:
            return ssn.scalar(select(func.count()).select_from(Post))

    def _add_post(self, ssn: Session, post: dict) -> None:
        uuid = post["uuid"]
        ssn.add(Post(
            uuid=uuid,
            url=post.get("url"),
            author=post.get("author"),
            published=parse_timestamp(post.get("published")),
            title=post.get("title"),
            text=post.get("text"),
            language=post.get("language"),
            sentiment=post.get("sentiment"),
            ord_in_thread=post.get("ord_in_thread"),
            parent_url=post.get("parent_url"),
            highlight_text=post.get("highlightText"),
            highlight_title=post.get("highlightTitle"),
            highlight_thread_title=post.get("highlightThreadTitle"),
            crawled=parse_timestamp(post.get("crawled")),
            updated=parse_timestamp(post.get("updated")),
        ))
        # children reference posts.uuid, so the post row goes first
        ssn.flush()

        thread = post.get("thread")
        if thread:
            ssn.add(Thread(
                uuid=thread.get("uuid"),
                url=thread.get("url"),
                site_full=thread.get("site_full"),
                site=thread.get("site"),
                site_section=thread.get("site_section"),
                title=thread.get("title"),
                title_full=thread.get("title_full"),
                published=parse_timestamp(thread.get("published")),
                country=thread.get("country"),
                main_image=thread.get("main_image"),
                performance_score=thread.get("performance_score"),
                domain_rank=thread.get("domain_rank"),
                post_uuid=uuid,
            ))

        for category in post.get("categories") or []:
            ssn.add(Category(post_uuid=uuid, category=category))

        entities = post.get("entities") or {}
        for key, entity_type in ENTITY_TYPES:
            for entity in entities.get(key) or []:
                ssn.add(Entity(
                    post_uuid=uuid,
                    type=entity_type,
                    name=entity.get("name"),
                    sentiment=entity.get("sentiment"),
                ))
