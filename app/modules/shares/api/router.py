from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session
import logging

from app.core.config import settings
from app.core.errors import AppError, NotAuthorized, NotFoundError, UnexpectedError
from app.core.pagination import PageParams, build_pagination
from app.core.schemas import Envelope
from app.core.targets import TargetKind
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.cache.invalidation import keys_for
from app.modules.comments.services.comment import count_comments
from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import Post as PostSchema
from app.modules.reactions.services.reaction import get_actor_reaction, get_reaction_counts
from app.modules.shares.models.share import Share
from app.modules.shares.schemas.share import ShareCreate, ShareDetail, ShareStatus, ShareUpdate, UnshareResult
from app.modules.shares.services.share import (
    check_user_shared, create_share, delete_share, get_share,
    list_shares_for_post, list_shares_for_user, update_share,
)
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserSummary
from app.modules.user_management.services.user import get_user

router = APIRouter()
logger = logging.getLogger("app")

def _prepare_share_response(db: Session, share: Share, viewer_id: str) -> ShareDetail:
    """Attach sharer, original post, and the share's own aggregates"""
    detail = ShareDetail.model_validate(share)

    sharer = get_user(db, share.user_id)
    if sharer:
        detail.user = UserSummary.model_validate(sharer)

    post = db.query(Post).filter(Post.id == share.post_id).first()
    if post:
        detail.post = PostSchema.model_validate(post)

    detail.reaction_count = get_reaction_counts(db, share.id, TargetKind.SHARE)["total"]
    detail.comment_count = count_comments(db, share.id, TargetKind.SHARE)
    own = get_actor_reaction(db, viewer_id, share.id, TargetKind.SHARE)
    detail.user_reaction = own.reaction_type if own else None
    return detail

@router.post("/post/{post_id}", response_model=Envelope[ShareDetail])
def share_post(
    *,
    db: Session = Depends(get_db),
    response: Response,
    post_id: str = Path(..., description="The ID of the post to share"),
    share_in: Optional[ShareCreate] = None,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Share a post; sharing it again updates caption and audience"""
    share_in = share_in or ShareCreate()
    try:
        share, created = create_share(db, current_user.id, post_id, share_in.share_caption, share_in.audience)
        data = _prepare_share_response(db, share, current_user.id)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error sharing post: {str(e)}")
        raise UnexpectedError("Failed to share post") from e

    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return {
        "success": True,
        "data": data,
        "invalidate": keys_for("share_post", post_id=post_id, actor_id=current_user.id),
        "message": "Post shared successfully" if created else "Share updated successfully",
    }

@router.get("/post/{post_id}", response_model=Envelope[List[ShareDetail]])
def read_post_shares(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    paging: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Shares of a post, newest first"""
    shares, total = list_shares_for_post(db, post_id, paging.page, paging.limit)
    return {
        "success": True,
        "data": [_prepare_share_response(db, share, current_user.id) for share in shares],
        "pagination": build_pagination(paging.page, paging.limit, total),
    }

@router.get("/post/{post_id}/check", response_model=Envelope[ShareStatus])
def read_share_status(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Whether the current user has shared a post"""
    return {"success": True, "data": ShareStatus(shared=check_user_shared(db, current_user.id, post_id))}

@router.get("/user/{user_id}", response_model=Envelope[List[ShareDetail]])
def read_user_shares(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Shares made by a user that the current user may see"""
    shares, total = list_shares_for_user(db, user_id, current_user.id, page, limit)
    return {
        "success": True,
        "data": [_prepare_share_response(db, share, current_user.id) for share in shares],
        "pagination": build_pagination(page, limit, total),
    }

@router.get("/{share_id}", response_model=Envelope[ShareDetail])
def read_share(
    *,
    db: Session = Depends(get_db),
    share_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """A single share"""
    share = get_share(db, share_id)
    if not share:
        raise NotFoundError("Share not found")
    if share.audience == "OnlyMe" and share.user_id != current_user.id:
        raise NotAuthorized("This share is private")
    return {"success": True, "data": _prepare_share_response(db, share, current_user.id)}

@router.put("/{share_id}", response_model=Envelope[ShareDetail])
def update_own_share(
    *,
    db: Session = Depends(get_db),
    share_id: str,
    share_in: ShareUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Edit caption or audience of the current user's share"""
    try:
        share = update_share(db, current_user.id, share_id, share_in)
        data = _prepare_share_response(db, share, current_user.id)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error updating share: {str(e)}")
        raise UnexpectedError("Failed to update share") from e

    return {
        "success": True,
        "data": data,
        "invalidate": keys_for("update_share", share_id=share_id, actor_id=current_user.id),
        "message": "Share updated successfully",
    }

@router.delete("/{share_id}", response_model=Envelope[UnshareResult])
def unshare(
    *,
    db: Session = Depends(get_db),
    share_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Delete the current user's share with its reactions and comments"""
    try:
        result = delete_share(db, current_user.id, share_id)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error unsharing post: {str(e)}")
        raise UnexpectedError("Failed to unshare post") from e

    return {
        "success": True,
        "data": UnshareResult.model_validate(result),
        "invalidate": keys_for("unshare", share_id=share_id, post_id=result["post_id"], actor_id=current_user.id),
        "message": "Post unshared successfully",
    }
