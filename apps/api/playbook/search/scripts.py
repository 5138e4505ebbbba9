"""Painless scripts that apply reaction transitions atomically on the engine side."""

from typing import Any, NamedTuple, Optional

from playbook.core.constants import (
    DOWNVOTED_BY_USER_FIELD,
    NUMBER_OF_FAILURES_FIELD,
    NUMBER_OF_SUCCESSES_FIELD,
    NUMBER_OF_TRIES_FIELD,
    STARRED_BY_USER_FIELD,
    SUCCESS_PERCENTAGE_FIELD,
    UPVOTED_BY_USER_FIELD,
)
from playbook.domain import Vote

_MEMBERSHIP_FIELDS = (STARRED_BY_USER_FIELD, UPVOTED_BY_USER_FIELD, DOWNVOTED_BY_USER_FIELD)
_COUNTER_FIELDS = (NUMBER_OF_FAILURES_FIELD, NUMBER_OF_SUCCESSES_FIELD, NUMBER_OF_TRIES_FIELD)

_PROLOGUE = "".join(
    f"if (ctx._source.{field} == null) {{ ctx._source.{field} = []; }}\n"
    for field in _MEMBERSHIP_FIELDS
) + "".join(
    f"if (ctx._source.{field} == null) {{ ctx._source.{field} = 0; }}\n"
    for field in _COUNTER_FIELDS
)

_RECOMPUTE_PERCENTAGE = (
    f"if (ctx._source.{NUMBER_OF_TRIES_FIELD} != 0) {{\n"
    f"  ctx._source.{SUCCESS_PERCENTAGE_FIELD} = (double) Math.round("
    f"(double)ctx._source.{NUMBER_OF_SUCCESSES_FIELD}/(double)ctx._source.{NUMBER_OF_TRIES_FIELD}*100)/100;\n"
    f"}} else {{\n"
    f"  ctx._source.{SUCCESS_PERCENTAGE_FIELD} = 0;\n"
    f"}}\n"
)


class ReactionScript(NamedTuple):
    source: str
    params: dict[str, str]

    def to_request(self) -> dict[str, Any]:
        return {"source": self.source, "lang": "painless", "params": dict(self.params)}


def _add_fragment(field: str, counter: Optional[str]) -> str:
    source = f"ctx._source.{field}.add(params.{field});\n"
    if counter is None:
        return source
    return (
        source
        + f"ctx._source.{counter} += 1;\n"
        + f"ctx._source.{NUMBER_OF_TRIES_FIELD} += 1;\n"
        + _RECOMPUTE_PERCENTAGE
    )


def _remove_fragment(field: str, counter: Optional[str]) -> str:
    body = f"    ctx._source.{field}.remove(i);\n"
    if counter is not None:
        body += (
            f"    ctx._source.{counter} -= 1;\n"
            f"    ctx._source.{NUMBER_OF_TRIES_FIELD} -= 1;\n"
            + "".join(f"    {line}\n" for line in _RECOMPUTE_PERCENTAGE.splitlines())
        )
    return (
        f"for (int i = ctx._source.{field}.length - 1; i >= 0; i--) {{\n"
        f"  if (ctx._source.{field}[i] == params.{field}) {{\n"
        f"{body}"
        f"  }}\n"
        f"}}\n"
    )


class ReactionScriptBuilder:
    """Accumulates reaction fragments behind a prologue that initializes missing fields."""

    def __init__(self):
        self.source = _PROLOGUE
        self.params: dict[str, str] = {}

    def _add(self, user_id: str, field: str, counter: Optional[str] = None) -> "ReactionScriptBuilder":
        self.params[field] = str(user_id)
        self.source += _add_fragment(field, counter)
        return self

    def _remove(self, user_id: str, field: str, counter: Optional[str] = None) -> "ReactionScriptBuilder":
        self.params[field] = str(user_id)
        self.source += _remove_fragment(field, counter)
        return self

    # Appends without a membership check; only called when the starred flag actually flips.
    def add_starred_by_user(self, user_id: str) -> "ReactionScriptBuilder":
        return self._add(user_id, STARRED_BY_USER_FIELD)

    def remove_starred_by_user(self, user_id: str) -> "ReactionScriptBuilder":
        return self._remove(user_id, STARRED_BY_USER_FIELD)

    def add_upvoted_by_user(self, user_id: str) -> "ReactionScriptBuilder":
        return self._add(user_id, UPVOTED_BY_USER_FIELD, NUMBER_OF_SUCCESSES_FIELD)

    def remove_upvoted_by_user(self, user_id: str) -> "ReactionScriptBuilder":
        return self._remove(user_id, UPVOTED_BY_USER_FIELD, NUMBER_OF_SUCCESSES_FIELD)

    def add_downvoted_by_user(self, user_id: str) -> "ReactionScriptBuilder":
        return self._add(user_id, DOWNVOTED_BY_USER_FIELD, NUMBER_OF_FAILURES_FIELD)

    def remove_downvoted_by_user(self, user_id: str) -> "ReactionScriptBuilder":
        return self._remove(user_id, DOWNVOTED_BY_USER_FIELD, NUMBER_OF_FAILURES_FIELD)

    def build(self) -> ReactionScript:
        return ReactionScript(self.source, dict(self.params))


def build_reaction_script(
    user_id: str,
    new_starred: bool,
    new_vote: Vote,
    old_starred: bool = False,
    old_vote: Vote = Vote.NONE,
) -> ReactionScript:
    """Script for one user's transition from the old reaction to the new one."""
    builder = ReactionScriptBuilder()
    if old_starred != new_starred:
        if new_starred:
            builder.add_starred_by_user(user_id)
        else:
            builder.remove_starred_by_user(user_id)

    if old_vote != new_vote:
        match new_vote:
            case Vote.UPVOTE:
                builder.add_upvoted_by_user(user_id)
            case Vote.DOWNVOTE:
                builder.add_downvoted_by_user(user_id)
            case Vote.NONE:
                pass

        match old_vote:
            case Vote.UPVOTE:
                builder.remove_upvoted_by_user(user_id)
            case Vote.DOWNVOTE:
                builder.remove_downvoted_by_user(user_id)
            case Vote.NONE:
                pass

    return builder.build()
