"""Closed enumerations shared by the relational model, filters and the search layer."""

from enum import Enum


class Vote(str, Enum):
    NONE = "NONE"
    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"


class Visibility(str, Enum):
    """Visibility mode requested by a pickup line search."""
    ALL = "ALL"
    VISIBLE = "VISIBLE"
    NOT_VISIBLE = "NOT_VISIBLE"


class SortingType(str, Enum):
    NEW = "NEW"
    BEST_OF_ALL_TIME = "BEST_OF_ALL_TIME"
    TRENDING = "TRENDING"
    RANDOM = "RANDOM"
