from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response
from sqlalchemy.orm import Session
import logging

from app.core.config import settings
from app.core.errors import AppError, UnexpectedError
from app.core.pagination import PageParams, build_pagination
from app.core.schemas import Envelope
from app.core.targets import TargetKind, require_target
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.cache.invalidation import keys_for
from app.modules.posts.schemas.post import Post as PostSchema
from app.modules.reactions.models.reaction import Reaction
from app.modules.reactions.schemas.reaction import (
    ActorReaction, ReactedPost, Reaction as ReactionSchema, ReactionIn, ReactionList, ReactionResult,
    ReactionWithUser, RemoveReactionResult,
)
from app.modules.reactions.services.reaction import (
    get_actor_reaction, get_reaction_counts, list_reactions,
    list_user_reacted_posts, remove_reaction, set_reaction,
)
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserSummary
from app.modules.user_management.services.user import get_users_by_ids

router = APIRouter()
share_router = APIRouter()
logger = logging.getLogger("app")

def _with_users(db: Session, reactions: List[Reaction]) -> List[ReactionWithUser]:
    users = get_users_by_ids(db, [r.user_id for r in reactions])
    result = []
    for reaction in reactions:
        item = ReactionWithUser.model_validate(reaction)
        if reaction.user_id in users:
            item.user = UserSummary.model_validate(users[reaction.user_id])
        result.append(item)
    return result

def _set(db: Session, user: User, target_id: str, kind: TargetKind, reaction_in: ReactionIn, mutation: str, **ids) -> Any:
    try:
        result = set_reaction(db, user.id, target_id, kind, reaction_in.reaction_type)
        return {
            "success": True,
            "data": ReactionResult(
                type=result["type"],
                counts=result["counts"],
                total=result["total"],
                actor_reaction=ReactionSchema.model_validate(result["actor_reaction"]) if result["actor_reaction"] else None,
            ),
            "invalidate": keys_for(mutation, actor_id=user.id, **ids),
            "message": "Reaction saved successfully",
        }
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error adding/updating reaction: {str(e)}")
        raise UnexpectedError("Failed to add/update reaction") from e

def _remove(db: Session, user: User, target_id: str, kind: TargetKind, mutation: str, **ids) -> Any:
    try:
        result = remove_reaction(db, user.id, target_id, kind)
        return {
            "success": True,
            "data": RemoveReactionResult.model_validate(result),
            "invalidate": keys_for(mutation, actor_id=user.id, **ids),
            "message": "Reaction removed successfully",
        }
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error removing reaction: {str(e)}")
        raise UnexpectedError("Failed to remove reaction") from e

def _list(db: Session, response: Response, target_id: str, kind: TargetKind, paging: PageParams, reaction_type: Optional[str]) -> Any:
    try:
        reactions, total = list_reactions(db, target_id, kind, paging.page, paging.limit, reaction_type)
        counts = get_reaction_counts(db, target_id, kind)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error getting reactions: {str(e)}")
        raise UnexpectedError("Failed to get reactions") from e

    response.headers["Cache-Control"] = f"private, max-age={settings.REACTION_STALE_SECONDS}"
    return {
        "success": True,
        "data": ReactionList(reactions=_with_users(db, reactions), **counts),
        "pagination": build_pagination(paging.page, paging.limit, total),
    }

@router.post("/{post_id}", response_model=Envelope[ReactionResult])
def set_post_reaction(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to react to"),
    reaction_in: ReactionIn,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create or change the current user's reaction to a post"""
    return _set(db, current_user, post_id, TargetKind.POST, reaction_in, "set_post_reaction", post_id=post_id)

@router.delete("/{post_id}", response_model=Envelope[RemoveReactionResult])
def remove_post_reaction(
    *,
    db: Session = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to remove the reaction from"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Remove the current user's reaction from a post"""
    return _remove(db, current_user, post_id, TargetKind.POST, "remove_post_reaction", post_id=post_id)

@router.get("/users/{user_id}/posts", response_model=Envelope[List[ReactedPost]])
def read_user_reacted_posts(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Posts a user has reacted to"""
    rows, total = list_user_reacted_posts(db, user_id, page, limit)
    return {
        "success": True,
        "data": [
            ReactedPost(post=PostSchema.model_validate(post), reaction_type=reaction.reaction_type, reacted_at=reaction.created_at)
            for reaction, post in rows
        ],
        "pagination": build_pagination(page, limit, total),
    }

@router.get("/{post_id}/me", response_model=Envelope[ActorReaction])
@router.get("/{post_id}/check", response_model=Envelope[ActorReaction])
def read_own_post_reaction(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """The current user's reaction to a post, if any"""
    reaction = get_actor_reaction(db, current_user.id, post_id, TargetKind.POST)
    return {
        "success": True,
        "data": ActorReaction(reacted=reaction is not None, reaction_type=reaction.reaction_type if reaction else None),
    }

@router.get("/{post_id}", response_model=Envelope[ReactionList])
def read_post_reactions(
    *,
    db: Session = Depends(get_db),
    response: Response,
    post_id: str,
    paging: PageParams = Depends(),
    reaction_type: Optional[str] = Query(None, alias="reactionType"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Reactions on a post with per-type counts"""
    require_target(db, post_id, TargetKind.POST)
    return _list(db, response, post_id, TargetKind.POST, paging, reaction_type)

@share_router.post("/{share_id}/reactions", response_model=Envelope[ReactionResult])
def set_share_reaction(
    *,
    db: Session = Depends(get_db),
    share_id: str,
    reaction_in: ReactionIn,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create or change the current user's reaction to a share"""
    return _set(db, current_user, share_id, TargetKind.SHARE, reaction_in, "set_share_reaction", share_id=share_id)

@share_router.delete("/{share_id}/reactions", response_model=Envelope[RemoveReactionResult])
def remove_share_reaction(
    *,
    db: Session = Depends(get_db),
    share_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Remove the current user's reaction from a share"""
    return _remove(db, current_user, share_id, TargetKind.SHARE, "remove_share_reaction", share_id=share_id)

@share_router.get("/{share_id}/reactions", response_model=Envelope[ReactionList])
def read_share_reactions(
    *,
    db: Session = Depends(get_db),
    response: Response,
    share_id: str,
    paging: PageParams = Depends(),
    reaction_type: Optional[str] = Query(None, alias="reactionType"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Reactions on a share with per-type counts"""
    require_target(db, share_id, TargetKind.SHARE)
    return _list(db, response, share_id, TargetKind.SHARE, paging, reaction_type)
