from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Text
from sqlalchemy.sql import func

from app.db.session import Base

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), index=True)  # recipient
    actor_id = Column(String, ForeignKey("users.id"), nullable=True)  # The user who triggered the notification
    type = Column(String)  # like, reaction, share, comment
    content = Column(Text)
    target_id = Column(String, nullable=True)
    target_kind = Column(String, nullable=True)  # Post, Share
    reaction_type = Column(String, nullable=True)
    comment_id = Column(String, nullable=True, index=True)  # set for comment notifications
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=func.now())
