"""Bool/function_score query construction for pickup line and user searches."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from playbook.core.constants import (
    CONTENT_FIELD,
    DISPLAY_NAME_FIELD,
    NUMBER_OF_SUCCESSES_FIELD,
    RANDOM_SCORE_FIELD,
    SORT_BY_BEST_OF_ALL_TIME_UPVOTE_WEIGHT,
    SORT_BY_NEW_SCALE_IN_DAYS,
    SORT_BY_TRENDING_SCALE_IN_DAYS,
    SORT_BY_TRENDING_UPVOTE_WEIGHT,
    STARRED_BY_USER_FIELD,
    SUCCESS_PERCENTAGE_FIELD,
    TAGS_FIELD,
    TITLE_FIELD,
    UPDATED_AT_FIELD,
    UPVOTED_BY_USER_FIELD,
    USER_ID_FIELD,
    USERNAME_FIELD,
    VISIBLE_FIELD,
)
from playbook.domain import SortingType, Visibility
from playbook.schemas.filters import PickupLineFilters, UserFilters


class QueryBuilder(ABC):
    """Mutable query under construction. One instance belongs to one request."""

    @abstractmethod
    def with_user_filter(self, user_id: str) -> None: ...

    @abstractmethod
    def with_visible_filter(self, visible: bool) -> None: ...

    @abstractmethod
    def with_starred_by_user_filter(self, user_id: str) -> None: ...

    @abstractmethod
    def with_upvoted_by_user_filter(self, user_id: str) -> None: ...

    @abstractmethod
    def with_success_percentage_filter(self, success_percentage: float) -> None: ...

    @abstractmethod
    def with_tags_should(self, tag_ids: list[str]) -> None: ...

    @abstractmethod
    def with_tags_filter(self, tag_ids: list[str]) -> None: ...

    @abstractmethod
    def with_title_suggestion_should(self, title: str) -> None: ...

    @abstractmethod
    def with_content_suggestion(self, content: str) -> None: ...

    @abstractmethod
    def with_username_suggestion_should(self, username: str) -> None: ...

    @abstractmethod
    def with_display_name_suggestion_should(self, display_name: str) -> None: ...

    @abstractmethod
    def set_minimum_should_match(self, minimum_should_match: int) -> None: ...

    @abstractmethod
    def with_time_scoring(self, scale_in_days: int) -> None: ...

    @abstractmethod
    def with_upvotes_scoring(self, scoring_weight: float) -> None: ...

    @abstractmethod
    def with_random_scoring(self, seed: int) -> None: ...

    @abstractmethod
    def build(self) -> dict[str, Any]: ...


class BoolQueryBuilder(QueryBuilder):
    def __init__(self):
        self.filter: list[dict] = []
        self.should: list[dict] = []
        self.minimum_should_match: Optional[int] = None
        self.functions: list[dict] = []

    def with_user_filter(self, user_id: str) -> None:
        self.filter.append({"term": {USER_ID_FIELD: user_id}})

    def with_visible_filter(self, visible: bool) -> None:
        self.filter.append({"term": {VISIBLE_FIELD: visible}})

    def with_starred_by_user_filter(self, user_id: str) -> None:
        self.filter.append({"term": {STARRED_BY_USER_FIELD: user_id}})

    def with_upvoted_by_user_filter(self, user_id: str) -> None:
        self.filter.append({"term": {UPVOTED_BY_USER_FIELD: user_id}})

    def with_success_percentage_filter(self, success_percentage: float) -> None:
        self.filter.append({"range": {SUCCESS_PERCENTAGE_FIELD: {"gte": success_percentage}}})

    def with_tags_should(self, tag_ids: list[str]) -> None:
        for tag_id in tag_ids:
            self.should.append({"term": {TAGS_FIELD: tag_id}})

    def with_tags_filter(self, tag_ids: list[str]) -> None:
        for tag_id in tag_ids:
            self.filter.append({"term": {TAGS_FIELD: tag_id}})

    def _autocomplete_should(self, field: str, value: str) -> None:
        self.should.append(
            {
                "multi_match": {
                    "query": value,
                    "type": "bool_prefix",
                    "fields": [field, f"{field}.2gram", f"{field}.3gram"],
                }
            }
        )

    def with_title_suggestion_should(self, title: str) -> None:
        self._autocomplete_should(TITLE_FIELD, title)

    def with_content_suggestion(self, content: str) -> None:
        self.should.append({"match": {CONTENT_FIELD: {"query": content}}})

    def with_username_suggestion_should(self, username: str) -> None:
        self._autocomplete_should(USERNAME_FIELD, username)

    def with_display_name_suggestion_should(self, display_name: str) -> None:
        self._autocomplete_should(DISPLAY_NAME_FIELD, display_name)

    def set_minimum_should_match(self, minimum_should_match: int) -> None:
        self.minimum_should_match = minimum_should_match

    def with_time_scoring(self, scale_in_days: int) -> None:
        self.functions.append({"gauss": {UPDATED_AT_FIELD: {"scale": f"{scale_in_days}d"}}})

    def with_upvotes_scoring(self, scoring_weight: float) -> None:
        self.functions.append(
            {"field_value_factor": {"field": NUMBER_OF_SUCCESSES_FIELD, "factor": scoring_weight}}
        )

    def with_random_scoring(self, seed: int) -> None:
        # Without a seed the engine ignores the field and reshuffles on every request
        self.functions.append({"random_score": {"seed": seed, "field": RANDOM_SCORE_FIELD}})

    def build(self) -> dict[str, Any]:
        """Plain bool query, or a function_score wrapper when scoring functions exist.

        Inside function_score the filter clauses move to must, since filter context
        produces no score for the functions to modulate.
        """
        bool_query: dict[str, Any] = {}
        clause_key = "must" if self.functions else "filter"
        if self.filter:
            bool_query[clause_key] = list(self.filter)
        if self.should:
            bool_query["should"] = list(self.should)
        if self.minimum_should_match is not None:
            bool_query["minimum_should_match"] = self.minimum_should_match
        if not self.functions:
            return {"bool": bool_query}
        return {
            "function_score": {
                "query": {"bool": bool_query},
                "functions": list(self.functions),
            }
        }


class SearchRequestBuilder:
    """Paging, filters and sorting applied on top of a QueryBuilder."""

    def __init__(
        self,
        query: QueryBuilder,
        page_size: int,
        minimum_should_match: Optional[int] = None,
        random_seed: int = 0,
    ):
        self.query = query
        self.random_seed = random_seed
        self.page_size = page_size
        self.offset = 0
        self.size = page_size
        if minimum_should_match is not None:
            self.query.set_minimum_should_match(minimum_should_match)

    def with_offset(self, offset: int) -> None:
        self.offset = offset

    def with_size(self, size: int) -> None:
        self.size = size

    def apply_filters(self, filters: PickupLineFilters, requesting_user_id: str) -> None:
        self.with_offset(filters.page * self.page_size)

        if filters.tags:
            if filters.match_all_tags:
                self.query.with_tags_filter(filters.tags)
            else:
                self.query.with_tags_should(filters.tags)

        if filters.title:
            self.query.with_title_suggestion_should(filters.title)

        if filters.content:
            self.query.with_content_suggestion(filters.content)

        if filters.starred:
            self.query.with_starred_by_user_filter(requesting_user_id)

        # Upvotes of the requester only make sense on their own or unscoped listings
        if filters.only_upvoted and (
            filters.user_id is None or filters.user_id == requesting_user_id
        ):
            self.query.with_upvoted_by_user_filter(requesting_user_id)

        if filters.user_id is not None:
            self.query.with_user_filter(filters.user_id)

        if filters.success_percentage > 0.0:
            self.query.with_success_percentage_filter(filters.success_percentage)

        self.apply_visibility(filters.visibility, filters.user_id == requesting_user_id)

    def apply_visibility(self, visibility: Optional[Visibility], is_own_content: bool) -> None:
        """Hidden pickup lines are only ever matched for their owner."""
        match visibility:
            case Visibility.VISIBLE:
                self.query.with_visible_filter(True)
            case Visibility.NOT_VISIBLE:
                self.query.with_visible_filter(not is_own_content)
            case Visibility.ALL:
                pass
            case None:
                if not is_own_content:
                    self.query.with_visible_filter(True)

    def apply_sorting(self, filters: PickupLineFilters) -> None:
        match filters.sorting_type:
            case SortingType.NEW:
                self.query.with_time_scoring(SORT_BY_NEW_SCALE_IN_DAYS)
            case SortingType.BEST_OF_ALL_TIME:
                self.query.with_upvotes_scoring(SORT_BY_BEST_OF_ALL_TIME_UPVOTE_WEIGHT)
            case SortingType.TRENDING:
                self.query.with_time_scoring(SORT_BY_TRENDING_SCALE_IN_DAYS)
                self.query.with_upvotes_scoring(SORT_BY_TRENDING_UPVOTE_WEIGHT)
            case SortingType.RANDOM:
                self.query.with_random_scoring(self.random_seed)
            case None:
                pass

    def apply_user_filters(self, filters: UserFilters) -> None:
        self.with_offset(filters.page * self.page_size)

        if filters.username:
            self.query.with_username_suggestion_should(filters.username)

        if filters.display_name:
            self.query.with_display_name_suggestion_should(filters.display_name)

    def build(self) -> dict[str, Any]:
        """Keyword arguments for AsyncElasticsearch.search."""
        return {"query": self.query.build(), "from_": self.offset, "size": self.size}
