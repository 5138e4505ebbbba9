from tests.fakes.search import FakeElasticsearch

__all__ = ["FakeElasticsearch"]
