from app.modules.cache.invalidation import INVALIDATION_RULES, describe_rules, keys_for

def test_keys_rendered_with_ids():
    keys = keys_for("toggle_like", post_id="p1", actor_id="u1")
    assert ["post", "p1"] in keys
    assert ["likedPosts", "u1"] in keys
    assert ["feed"] in keys

def test_missing_ids_skip_templates():
    keys = keys_for("delete_comment", post_id="p1")
    assert ["comments", "p1"] in keys
    assert not any(key[0] == "share-comments" for key in keys)

def test_every_mutation_invalidates_feed():
    for mutation in INVALIDATION_RULES:
        if mutation != "update_comment":
            assert ["feed"] in keys_for(mutation), mutation

def test_describe_rules():
    rules = describe_rules()
    assert rules["reactionStaleSeconds"] == 30
    assert rules["rules"]["create_post"] == [["posts"], ["feed"]]
