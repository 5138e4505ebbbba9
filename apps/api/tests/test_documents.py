"""Tests for entity-to-document projection."""

from datetime import datetime, timezone

from playbook.db.models import PickupLine, Reaction, Tag, User
from playbook.search.documents import (
    pickup_line_to_document,
    pickup_line_to_reindex_document,
    pickup_line_to_update_document,
    tag_to_document,
    user_to_document,
)

OWNER = "44444444-4444-4444-4444-444444444444"


def make_pickup_line() -> PickupLine:
    user = User(id=OWNER, username="owner@example.com", display_name="Owner", hashed_password="x")
    return PickupLine(
        id="55555555-5555-5555-5555-555555555555",
        title="Are you a magnet?",
        content="Because I'm attracted to you",
        visible=True,
        user_id=OWNER,
        user=user,
        tags=[Tag(id="t-1", name="cheesy", user_id=OWNER), Tag(id="t-2", name="physics", user_id=OWNER)],
        updated_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


def test_full_projection_denormalizes_owner_and_zeroes_counters():
    source = pickup_line_to_document(make_pickup_line()).to_source()
    assert source["id"] == "55555555-5555-5555-5555-555555555555"
    assert source["tags"] == ["t-1", "t-2"]
    assert source["userId"] == OWNER
    assert source["username"] == "owner@example.com"
    assert source["display_name"] == "Owner"
    assert source["visible"] is True
    assert source["numberOfSuccesses"] == 0
    assert source["numberOfFailures"] == 0
    assert source["numberOfTries"] == 0
    assert source["successPercentage"] == 0.0
    assert source["updatedAt"].startswith("2026-01-02T03:04:05")
    for field in ("starredByUser", "upvotedByUser", "downvotedByUser"):
        assert field not in source


def test_partial_projection_never_touches_counters():
    source = pickup_line_to_update_document(make_pickup_line()).to_source()
    assert set(source) == {"title", "content", "tags", "visible", "updatedAt"}


def test_reindex_projection_rebuilds_counters_from_reactions():
    reactions = [
        Reaction(user_id="u1", starred=True, vote="UPVOTE"),
        Reaction(user_id="u2", starred=False, vote="UPVOTE"),
        Reaction(user_id="u3", starred=True, vote="DOWNVOTE"),
        Reaction(user_id="u4", starred=False, vote="NONE"),
    ]
    source = pickup_line_to_reindex_document(make_pickup_line(), reactions).to_source()
    assert source["starredByUser"] == ["u1", "u3"]
    assert source["upvotedByUser"] == ["u1", "u2"]
    assert source["downvotedByUser"] == ["u3"]
    assert source["numberOfSuccesses"] == 2
    assert source["numberOfFailures"] == 1
    assert source["numberOfTries"] == 3
    assert source["successPercentage"] == 0.67


def test_tag_and_user_projections():
    tag = Tag(id="t-9", name="smooth", user_id=OWNER)
    assert tag_to_document(tag).to_source() == {"id": "t-9", "name": "smooth", "userId": OWNER}
    user = User(id=OWNER, username="owner@example.com", display_name="Owner")
    assert user_to_document(user).to_source() == {
        "id": OWNER,
        "username": "owner@example.com",
        "display_name": "Owner",
    }
