from typing import Dict, List, Optional
from datetime import datetime

from app.core.schemas import APIModel
from app.modules.posts.schemas.post import Post
from app.modules.user_management.schemas.user import UserSummary

class ReactionIn(APIModel):
    """Body of POST /reactions/{post_id} and POST /shares/{share_id}/reactions"""
    reaction_type: str  # any case variant of Like, Heart, Laughing, Wow, Sad, Angry

class Reaction(APIModel):
    """Reaction model returned to client"""
    id: str
    user_id: str
    target_id: str
    target_kind: str
    reaction_type: str
    created_at: datetime
    updated_at: datetime

class ReactionWithUser(Reaction):
    user: Optional[UserSummary] = None

class ReactionCounts(APIModel):
    """Per-type counts, every type present"""
    counts: Dict[str, int]
    total: int

class ReactionResult(ReactionCounts):
    """State after set_reaction"""
    type: str
    actor_reaction: Optional[Reaction] = None

class RemoveReactionResult(ReactionCounts):
    removed: bool

class ActorReaction(APIModel):
    reacted: bool
    reaction_type: Optional[str] = None

class ReactionList(ReactionCounts):
    reactions: List[ReactionWithUser]

class ReactedPost(APIModel):
    post: Post
    reaction_type: str
    reacted_at: datetime
