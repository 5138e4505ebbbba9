"""Elasticsearch client construction and error translation."""

import logging
from contextlib import contextmanager
from typing import Iterator

from elasticsearch import (
    ApiError,
    AsyncElasticsearch,
    NotFoundError as ElasticNotFoundError,
    TransportError,
)

from playbook.core.config import Settings
from playbook.core.errors import (
    ExternalStoreUnavailableError,
    NotFoundError,
    PlaybookError,
    StoreError,
)

logger = logging.getLogger(__name__)


def get_search_client(settings: Settings) -> AsyncElasticsearch:
    kwargs = {}
    if settings.elasticsearch_username:
        kwargs["basic_auth"] = (
            settings.elasticsearch_username,
            settings.elasticsearch_password or "",
        )
    if settings.elasticsearch_ca_cert_path:
        kwargs["ca_certs"] = settings.elasticsearch_ca_cert_path
    return AsyncElasticsearch(hosts=[settings.elasticsearch_host], **kwargs)


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise Elasticsearch client errors as playbook error kinds."""
    try:
        yield
    except PlaybookError:
        raise
    except ElasticNotFoundError as e:
        raise NotFoundError(f"{operation}: document or index not found", cause=e) from e
    except ApiError as e:
        logger.warning("Elasticsearch %s failed with status %s", operation, e.meta.status)
        raise StoreError(f"{operation} failed: {e.message}", cause=e) from e
    except TransportError as e:
        logger.warning("Elasticsearch unreachable during %s: %s", operation, e)
        raise ExternalStoreUnavailableError(
            f"Search engine unavailable during {operation}", cause=e
        ) from e
