"""Post model.

A post is public when it is not a draft and its ``published_at`` is empty or
already in the past. A draft with a ``published_at`` is a scheduled post.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from blog_api.core.clock import utc_now
from blog_api.db.session import Base

TITLE_MAX_LENGTH = 255


class Post(Base):
    __tablename__ = "posts"
    __table_args__ = (Index("ix_posts_is_draft_published_at", "is_draft", "published_at"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    is_draft = Column(Boolean, nullable=False, default=True)
    published_at = Column(DateTime, nullable=True)  # naive UTC
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    user = relationship("User", back_populates="posts")
