from app.core.targets import TargetKind
from app.modules.reactions.models.reaction import Reaction
from app.modules.reactions.services.migration import fix_reaction_case
from app.modules.reactions.services.reaction import get_reaction_counts

def seed_legacy(db):
    db.add_all([
        Reaction(id="r1", user_id="u1", target_id="p1", target_kind="Post", reaction_type="HEART"),
        Reaction(id="r2", user_id="u3", target_id="p1", target_kind="Post", reaction_type="like"),
        Reaction(id="r3", user_id="u2", target_id="p1", target_kind="Post", reaction_type="Sad"),
        Reaction(id="r4", user_id="u1", target_id="p2", target_kind="Post", reaction_type="Love"),
    ])
    db.commit()

def types(db):
    return {r.id: r.reaction_type for r in db.query(Reaction).all()}

def test_fix_reaction_case(db):
    seed_legacy(db)
    stats = fix_reaction_case(db, batch_size=2)
    assert stats == {"scanned": 4, "updated": 2, "unknown": 1}
    assert types(db) == {"r1": "Heart", "r2": "Like", "r3": "Sad", "r4": "Love"}
    assert get_reaction_counts(db, "p1", TargetKind.POST)["counts"]["Heart"] == 1

def test_dry_run_changes_nothing(db):
    seed_legacy(db)
    stats = fix_reaction_case(db, dry_run=True)
    assert stats["updated"] == 2
    assert types(db)["r1"] == "HEART"

def test_second_run_is_a_no_op(db):
    seed_legacy(db)
    fix_reaction_case(db)
    assert fix_reaction_case(db)["updated"] == 0
