import pytest

from app.core.errors import NotAuthorized, NotFoundError
from app.core.targets import TargetKind
from app.modules.comments.models.comment import Comment
from app.modules.comments.services.comment import add_comment
from app.modules.notifications.models.notification import Notification
from app.modules.posts.services.post import delete_post
from app.modules.reactions.models.reaction import Reaction
from app.modules.reactions.services.reaction import set_reaction
from app.modules.shares.models.share import Share
from app.modules.shares.schemas.share import ShareUpdate
from app.modules.shares.services.share import (
    count_shares, create_share, delete_share, list_shares_for_user, update_share,
)

SHARE = TargetKind.SHARE

def test_share_twice_updates_existing(db):
    share, created = create_share(db, "u1", "p1", "  look at this  ", "Following")
    assert created
    assert share.share_caption == "look at this"

    again, created = create_share(db, "u1", "p1", "changed my mind")
    assert not created
    assert again.id == share.id
    assert again.share_caption == "changed my mind"
    assert again.audience == "Following"
    assert count_shares(db, "p1") == 1

def test_invalid_audience_means_public(db):
    share, _ = create_share(db, "u1", "p1", None, "Friends")
    assert share.audience == "Public"

def test_private_post_cannot_be_shared_by_others(db):
    with pytest.raises(NotAuthorized):
        create_share(db, "u1", "p_private")
    share, created = create_share(db, "u2", "p_private")
    assert created

def test_only_owner_updates_share(db):
    share, _ = create_share(db, "u1", "p1")
    with pytest.raises(NotAuthorized):
        update_share(db, "u3", share.id, ShareUpdate(share_caption="hijack"))
    updated = update_share(db, "u1", share.id, ShareUpdate(audience="OnlyMe"))
    assert updated.audience == "OnlyMe"

def test_delete_share_cascades(db):
    share, _ = create_share(db, "u1", "p1")
    share_id = share.id
    set_reaction(db, "u3", share_id, SHARE, "Heart")
    add_comment(db, "u3", share_id, SHARE, "nice share")
    assert db.query(Notification).filter(Notification.target_id == share_id).count() == 2

    result = delete_share(db, "u1", share_id)
    assert result == {"share_id": share_id, "post_id": "p1", "share_count": 0}
    assert db.query(Share).count() == 0
    assert db.query(Reaction).filter(Reaction.target_id == share_id).count() == 0
    assert db.query(Comment).filter(Comment.target_id == share_id).count() == 0
    assert db.query(Notification).filter(Notification.target_id == share_id).count() == 0

def test_delete_share_errors(db):
    share, _ = create_share(db, "u1", "p1")
    with pytest.raises(NotAuthorized):
        delete_share(db, "u3", share.id)
    with pytest.raises(NotFoundError):
        delete_share(db, "u1", "missing")
    assert count_shares(db, "p1") == 1

def test_user_shares_hide_private_from_others(db):
    create_share(db, "u1", "p1", None, "OnlyMe")
    create_share(db, "u1", "p2")

    _, own_total = list_shares_for_user(db, "u1", "u1")
    shares, total = list_shares_for_user(db, "u1", "u3")
    assert own_total == 2
    assert total == 1
    assert shares[0].post_id == "p2"

def test_delete_post_removes_shares_and_their_ledgers(db):
    share, _ = create_share(db, "u1", "p1")
    share_id = share.id
    set_reaction(db, "u3", share_id, SHARE, "Wow")
    set_reaction(db, "u3", "p1", TargetKind.POST, "Like")

    with pytest.raises(NotAuthorized):
        delete_post(db, "u1", "p1")

    delete_post(db, "u2", "p1")
    assert db.query(Share).count() == 0
    assert db.query(Reaction).count() == 0

def test_failed_cascade_rolls_back(db, monkeypatch):
    share, _ = create_share(db, "u1", "p1")
    share_id = share.id
    set_reaction(db, "u3", share_id, SHARE, "Heart")
    add_comment(db, "u3", share_id, SHARE, "keep me")

    def broken(*args, **kwargs):
        raise RuntimeError("storage failure")
    monkeypatch.setattr("app.modules.shares.services.share.delete_target_notifications", broken)

    with pytest.raises(RuntimeError):
        delete_share(db, "u1", share_id)

    assert db.query(Share).filter(Share.id == share_id).count() == 1
    assert db.query(Reaction).filter(Reaction.target_id == share_id).count() == 1
    assert db.query(Comment).filter(Comment.target_id == share_id).count() == 1

def test_racing_first_share_reports_update(db, monkeypatch):
    share, _ = create_share(db, "u1", "p1")
    share_id = share.id

    # the other request committed between our read and our write
    monkeypatch.setattr("app.modules.shares.services.share.get_user_share", lambda *args: None)
    again, created = create_share(db, "u1", "p1", "second try")

    assert not created
    assert again.id == share_id
    assert db.query(Notification).filter(Notification.type == "share").count() == 1
