from playbook.search.client import get_search_client, translate_errors
from playbook.search.mappings import IndexManager
from playbook.search.mapper import SearchResultMapper
from playbook.search.query import BoolQueryBuilder, QueryBuilder, SearchRequestBuilder
from playbook.search.scripts import ReactionScript, ReactionScriptBuilder, build_reaction_script
from playbook.search.wrapper import ElasticSearchWrapper

__all__ = [
    "get_search_client",
    "translate_errors",
    "IndexManager",
    "SearchResultMapper",
    "BoolQueryBuilder",
    "QueryBuilder",
    "SearchRequestBuilder",
    "ReactionScript",
    "ReactionScriptBuilder",
    "build_reaction_script",
    "ElasticSearchWrapper",
]
