from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.sql import func

from app.db.session import Base

class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_target_created", "target_kind", "target_id", "created_at"),
    )

    id = Column(String, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    target_id = Column(String, nullable=False)
    target_kind = Column(String, nullable=False)  # Post, Share
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
