"""
Client cache invalidation contract.

Every mutation lists the client query keys whose data it makes stale: the
target's own detail key, the owning user's collections and the global feed.
Mutation responses carry the rendered keys in their ``invalidate`` field so
the client can drop exactly those views.

Keys use the client's vocabulary. ``{post_id}``-style placeholders are
filled from the ids passed to ``keys_for``.
"""
from typing import Any, Dict, List, Tuple

from app.core.config import settings

INVALIDATION_RULES: Dict[str, Tuple[Tuple[str, ...], ...]] = {
    "toggle_like": (
        ("post", "{post_id}"),
        ("likes", "{post_id}"),
        ("userLiked", "{post_id}"),
        ("likedPosts", "{actor_id}"),
        ("posts",),
        ("feed",),
    ),
    "set_post_reaction": (
        ("post", "{post_id}"),
        ("reactions", "{post_id}"),
        ("userReaction", "{post_id}"),
        ("reactedPosts", "{actor_id}"),
        ("posts",),
        ("feed",),
    ),
    "remove_post_reaction": (
        ("post", "{post_id}"),
        ("reactions", "{post_id}"),
        ("userReaction", "{post_id}"),
        ("reactedPosts", "{actor_id}"),
        ("posts",),
        ("feed",),
    ),
    "set_share_reaction": (
        ("share", "{share_id}"),
        ("share-reactions", "{share_id}"),
        ("userShares",),
        ("feed",),
    ),
    "remove_share_reaction": (
        ("share", "{share_id}"),
        ("share-reactions", "{share_id}"),
        ("userShares",),
        ("feed",),
    ),
    "share_post": (
        ("post", "{post_id}"),
        ("shares", "{post_id}"),
        ("userShared", "{post_id}"),
        ("userShares", "{actor_id}"),
        ("posts",),
        ("feed",),
    ),
    "update_share": (
        ("share", "{share_id}"),
        ("userShares", "{actor_id}"),
        ("feed",),
    ),
    "unshare": (
        ("post", "{post_id}"),
        ("share", "{share_id}"),
        ("shares", "{post_id}"),
        ("userShared", "{post_id}"),
        ("userShares", "{actor_id}"),
        ("posts",),
        ("feed",),
    ),
    "add_post_comment": (
        ("post", "{post_id}"),
        ("comments", "{post_id}"),
        ("posts",),
        ("feed",),
    ),
    "add_share_comment": (
        ("share", "{share_id}"),
        ("share-comments", "{share_id}"),
        ("userShares",),
        ("feed",),
    ),
    "update_comment": (
        ("comments", "{post_id}"),
        ("share-comments", "{share_id}"),
    ),
    "delete_comment": (
        ("post", "{post_id}"),
        ("comments", "{post_id}"),
        ("share", "{share_id}"),
        ("share-comments", "{share_id}"),
        ("userShares",),
        ("posts",),
        ("feed",),
    ),
    "create_post": (
        ("posts",),
        ("feed",),
    ),
    "delete_post": (
        ("post", "{post_id}"),
        ("posts",),
        ("shares",),
        ("userShares",),
        ("feed",),
    ),
}


def keys_for(mutation: str, **ids: Any) -> List[List[str]]:
    """
    Render the query keys a mutation invalidates.

    Templates whose placeholders are not supplied are skipped, so comment
    mutations on a post drop the share-comment keys and vice versa.
    """
    ids = {name: value for name, value in ids.items() if value is not None}
    keys = []
    for template in INVALIDATION_RULES[mutation]:
        try:
            key = [part.format(**ids) for part in template]
        except KeyError:
            continue
        if key not in keys:
            keys.append(key)
    return keys


def describe_rules() -> dict:
    """The whole contract, as published to clients"""
    return {
        "rules": {name: [list(t) for t in templates] for name, templates in INVALIDATION_RULES.items()},
        "reactionStaleSeconds": settings.REACTION_STALE_SECONDS,
    }
