from sqlalchemy import Column, Text, DateTime, String, Integer, Float, ForeignKey, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class Post(Base):
    __tablename__ = "posts"

    uuid                   = Column(String(255), primary_key=True)   # Webz.io post uuid
    url                    = Column(Text, nullable=False)
    author                 = Column(String(255))
    published              = Column(DateTime(timezone=True))
    title                  = Column(Text)
    text                   = Column(Text)
    language               = Column(String(50))
    sentiment              = Column(String(50))
    ord_in_thread          = Column(Integer)
    parent_url             = Column(Text)
    highlight_text         = Column(Text)
    highlight_title        = Column(Text)
    highlight_thread_title = Column(Text)
    crawled                = Column(DateTime(timezone=True))
    updated                = Column(DateTime(timezone=True))
    created_at             = Column(DateTime(timezone=True), server_default=func.now())

class Thread(Base):
    __tablename__ = "threads"

    id                = Column(Integer, primary_key=True, autoincrement=True)
    uuid              = Column(String(255), nullable=False, index=True)  # several posts can share a thread
    url               = Column(Text, nullable=False)
    site_full         = Column(Text)
    site              = Column(String(255))
    site_section      = Column(Text)
    title             = Column(Text)
    title_full        = Column(Text)
    published         = Column(DateTime(timezone=True))
    country           = Column(String(50))
    main_image        = Column(Text)
    performance_score = Column(Float)
    domain_rank       = Column(Integer)
    post_uuid         = Column(String(255), ForeignKey("posts.uuid", ondelete="CASCADE"), unique=True, nullable=False)
    created_at        = Column(DateTime(timezone=True), server_default=func.now())

class Category(Base):
    __tablename__ = "categories"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    post_uuid  = Column(String(255), ForeignKey("posts.uuid", ondelete="CASCADE"), nullable=False, index=True)
    category   = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class Entity(Base):
    __tablename__ = "entities"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    post_uuid  = Column(String(255), ForeignKey("posts.uuid", ondelete="CASCADE"), nullable=False, index=True)
    type       = Column(String(50), nullable=False)  # person / organization / location
    name       = Column(Text, nullable=False)
    sentiment  = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
