from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.sql import func

from app.db.session import Base

AUDIENCES = ("Public", "Following", "OnlyMe")

class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, index=True)
    content = Column(Text)
    media_url = Column(String, nullable=True)
    user_id = Column(String, ForeignKey("users.id"), index=True)
    audience = Column(String, default="Public")
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
