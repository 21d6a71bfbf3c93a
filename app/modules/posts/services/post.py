from typing import Optional
import uuid
from sqlalchemy.orm import Session
import logging

from app.core.errors import NotAuthorized, NotFoundError
from app.core.targets import TargetKind
from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import PostCreate, PostWithCounts
from app.modules.comments.models.comment import Comment
from app.modules.comments.services.comment import count_comments
from app.modules.likes.models.like import Like
from app.modules.likes.services.like import check_user_liked, count_likes
from app.modules.notifications.services.notification import delete_target_notifications
from app.modules.reactions.models.reaction import Reaction
from app.modules.reactions.services.reaction import get_actor_reaction, get_reaction_counts
from app.modules.shares.models.share import Share
from app.modules.shares.services.share import count_shares, purge_share
from app.modules.user_management.schemas.user import UserSummary
from app.modules.user_management.services.user import get_user

logger = logging.getLogger("app")

def get_post(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def create_post(db: Session, post_in: PostCreate, author_id: str) -> Post:
    """Create new post"""
    logger.info(f"Creating post for author ID: {author_id}")
    post = Post(
        id=str(uuid.uuid4()),
        user_id=author_id,
        **post_in.model_dump(),
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

def get_post_with_counts(db: Session, post_id: str, viewer_id: str) -> PostWithCounts:
    """Post with like/reaction/comment/share aggregates and the viewer's own state"""
    post = get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found")
    if post.audience == "OnlyMe" and post.user_id != viewer_id:
        raise NotAuthorized("This post is private")

    reactions = get_reaction_counts(db, post_id, TargetKind.POST)
    own_reaction = get_actor_reaction(db, viewer_id, post_id, TargetKind.POST)
    author = get_user(db, post.user_id)

    result = PostWithCounts.model_validate(post)
    result.author = UserSummary.model_validate(author) if author else None
    result.like_count = count_likes(db, post_id)
    result.comment_count = count_comments(db, post_id, TargetKind.POST)
    result.share_count = count_shares(db, post_id)
    result.reaction_count = reactions["total"]
    result.reaction_counts = reactions["counts"]
    result.is_liked = check_user_liked(db, viewer_id, post_id)
    result.user_reaction = own_reaction.reaction_type if own_reaction else None
    return result

def delete_post(db: Session, actor_id: str, post_id: str) -> None:
    """
    Delete post and everything attached to it: likes, reactions, comments,
    notifications, and every share of it with the share's own attachments.
    """
    post = get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found")
    if post.user_id != actor_id:
        raise NotAuthorized("You can only delete your own posts")

    logger.info(f"Deleting post with ID: {post_id}")
    kind = TargetKind.POST.value
    try:
        for share in db.query(Share).filter(Share.post_id == post_id).all():
            purge_share(db, share)
        db.query(Like).filter(Like.post_id == post_id).delete(synchronize_session=False)
        db.query(Reaction).filter(Reaction.target_kind == kind, Reaction.target_id == post_id).delete(synchronize_session=False)
        db.query(Comment).filter(Comment.target_kind == kind, Comment.target_id == post_id).delete(synchronize_session=False)
        delete_target_notifications(db, post_id, kind)

        # Finally, delete the post itself
        db.query(Post).filter(Post.id == post_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
