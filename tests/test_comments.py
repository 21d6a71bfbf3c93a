from datetime import datetime, timedelta

import pytest

from app.core.errors import EmptyContent, NotAuthorized, TargetNotFound, ValidationError
from app.core.targets import TargetKind
from app.modules.comments.models.comment import Comment
from app.modules.comments.services.comment import (
    add_comment, count_comments, delete_comment, get_comment, list_comments, update_comment,
)
from app.modules.notifications.models.notification import Notification

POST = TargetKind.POST

def add_many(db, n):
    return [add_comment(db, "u1", "p1", POST, f"comment {i}").id for i in range(n)]

def test_content_is_trimmed(db):
    comment = add_comment(db, "u1", "p1", POST, "   hello   ")
    assert comment.content == "hello"

@pytest.mark.parametrize("content", [None, "", "    "])
def test_empty_content_rejected(db, content):
    with pytest.raises(EmptyContent):
        add_comment(db, "u1", "p1", POST, content)
    assert count_comments(db, "p1", POST) == 0

def test_content_too_long(db):
    with pytest.raises(ValidationError):
        add_comment(db, "u1", "p1", POST, "x" * 501)

def test_missing_target(db):
    with pytest.raises(TargetNotFound):
        add_comment(db, "u1", "nope", TargetKind.SHARE, "hi")

def test_exactly_one_page(db):
    add_many(db, 10)
    comments, total = list_comments(db, "p1", POST, page=1, limit=10)
    assert len(comments) == 10
    assert total == 10

def test_second_page(db):
    ids = add_many(db, 11)
    first, total = list_comments(db, "p1", POST, page=1, limit=10)
    second, _ = list_comments(db, "p1", POST, page=2, limit=10)
    assert total == 11
    assert len(first) == 10
    assert len(second) == 1
    assert {c.id for c in first + second} == set(ids)

def test_non_author_cannot_delete(db):
    comment = add_comment(db, "u1", "p1", POST, "mine")
    with pytest.raises(NotAuthorized):
        delete_comment(db, "u3", comment.id)
    assert get_comment(db, comment.id) is not None

def test_author_edits_and_deletes(db):
    comment = add_comment(db, "u1", "p1", POST, "first draft")
    comment_id = comment.id
    assert update_comment(db, "u1", comment_id, "final").content == "final"

    deleted = delete_comment(db, "u1", comment_id)
    assert deleted == {"id": comment_id, "target_id": "p1", "target_kind": "Post"}
    assert get_comment(db, comment_id) is None

def test_oldest_first_ties_by_id(db):
    base = datetime(2026, 1, 1, 12, 0, 0)
    for comment_id, offset in (("c3", 2), ("c1", 0), ("c2b", 1), ("c2a", 1), ("c4", 3)):
        db.add(Comment(id=comment_id, user_id="u1", target_id="p1", target_kind="Post",
                       content=comment_id, created_at=base + timedelta(seconds=offset)))
    db.commit()

    pages = [[c.id for c in list_comments(db, "p1", POST, page=p, limit=2)[0]] for p in (1, 2, 3)]
    assert pages == [["c1", "c2a"], ["c2b", "c3"], ["c4"]]

def test_delete_removes_comment_notification(db):
    kept = add_comment(db, "u1", "p1", POST, "stays")
    gone = add_comment(db, "u1", "p1", POST, "goes")
    kept_id, gone_id = kept.id, gone.id
    assert db.query(Notification).filter(Notification.type == "comment").count() == 2

    delete_comment(db, "u1", gone_id)
    remaining = db.query(Notification).filter(Notification.type == "comment").all()
    assert [n.comment_id for n in remaining] == [kept_id]
