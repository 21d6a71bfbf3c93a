from enum import Enum
from typing import Optional

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func

from app.db.session import Base


class ReactionType(str, Enum):
    LIKE = "Like"
    HEART = "Heart"
    LAUGHING = "Laughing"
    WOW = "Wow"
    SAD = "Sad"
    ANGRY = "Angry"


REACTION_TYPES = [t.value for t in ReactionType]

# Older clients stored the enum token ("HEART") instead of the label ("Heart")
REACTION_MAP = {t.value.upper(): t.value for t in ReactionType}


def normalize_reaction_type(raw_type) -> Optional[str]:
    """Map any case variant of a reaction type to its canonical label, or None"""
    if raw_type is None:
        return None
    if isinstance(raw_type, ReactionType):
        return raw_type.value
    return REACTION_MAP.get(str(raw_type).strip().upper())


class Reaction(Base):
    __tablename__ = "reactions"
    __table_args__ = (
        UniqueConstraint("user_id", "target_id", "target_kind", name="uq_reactions_actor_target"),
        Index("ix_reactions_target", "target_kind", "target_id"),
    )

    id = Column(String, primary_key=True, index=True)
    reaction_type = Column(String, nullable=False)  # Like, Heart, Laughing, Wow, Sad, Angry
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    target_id = Column(String, nullable=False)  # posts.id or shares.id depending on target_kind
    target_kind = Column(String, nullable=False)  # Post, Share
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
