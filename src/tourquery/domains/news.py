"""News feed queries and search state.

News is read-only: there is no mutation, so news entries only refresh
through staleness or an explicit refetch.
"""

import functools
from datetime import timedelta

from tourquery.core.entities.cache_config import QueryOptions
from tourquery.core.entities.query_definition import QueryDefinition
from tourquery.core.entities.query_key import QueryKey
from tourquery.core.entities.search_params import NewsSearchParams
from tourquery.core.interfaces.key_builder import IKeyBuilder
from tourquery.core.interfaces.remote_service import INewsService
from tourquery.core.services.search_state import SearchStateController
from tourquery.infrastructure.key_builders.default import DefaultKeyBuilder

DOMAIN = "news"

NEWS_STALE_AFTER = timedelta(minutes=2)
LOOKUP_STALE_AFTER = timedelta(minutes=30)


class NewsKeys:
    """Query key factory for the news domain."""

    def __init__(self, key_builder: IKeyBuilder | None = None) -> None:
        self._builder = key_builder or DefaultKeyBuilder()

    def all(self) -> QueryKey:
        return self._builder.build(DOMAIN)

    def search(self, params: NewsSearchParams) -> QueryKey:
        return self._builder.build_search_key(DOMAIN, params)

    def featured(self, limit: int) -> QueryKey:
        return self._builder.build(DOMAIN, {"limit": limit}, "featured")

    def article(self, id_or_slug: str) -> QueryKey:
        return self._builder.build(DOMAIN, None, "article", id_or_slug)

    def categories(self) -> QueryKey:
        return self._builder.build(DOMAIN, None, "categories")

    def trending_tags(self, limit: int) -> QueryKey:
        return self._builder.build(DOMAIN, {"limit": limit}, "tags")


news_keys = NewsKeys()


def news_search_query(
    service: INewsService,
    params: NewsSearchParams | None = None,
) -> QueryDefinition:
    params = params or NewsSearchParams()
    return QueryDefinition(
        key=news_keys.search(params),
        producer=functools.partial(service.search, params),
        options=QueryOptions(
            stale_after=NEWS_STALE_AFTER,
            error_message="Failed to fetch news",
        ),
    )


def featured_news_query(service: INewsService, limit: int = 3) -> QueryDefinition:
    return QueryDefinition(
        key=news_keys.featured(limit),
        producer=functools.partial(service.get_featured, limit),
        options=QueryOptions(
            stale_after=NEWS_STALE_AFTER,
            error_message="Failed to fetch featured news",
        ),
    )


def news_article_query(service: INewsService, id_or_slug: str) -> QueryDefinition:
    """Single article by id or slug; disabled for an empty identifier."""
    return QueryDefinition(
        key=news_keys.article(id_or_slug),
        producer=functools.partial(service.get_by_id, id_or_slug),
        options=QueryOptions(
            stale_after=NEWS_STALE_AFTER,
            enabled=bool(id_or_slug),
            error_message="Failed to fetch article",
        ),
    )


def news_categories_query(service: INewsService) -> QueryDefinition:
    return QueryDefinition(
        key=news_keys.categories(),
        producer=service.get_categories,
        options=QueryOptions(
            stale_after=LOOKUP_STALE_AFTER,
            error_message="Failed to fetch categories",
        ),
    )


def trending_tags_query(service: INewsService, limit: int = 10) -> QueryDefinition:
    return QueryDefinition(
        key=news_keys.trending_tags(limit),
        producer=functools.partial(service.get_trending_tags, limit),
        options=QueryOptions(
            stale_after=LOOKUP_STALE_AFTER,
            error_message="Failed to fetch trending tags",
        ),
    )


class NewsSearchState(SearchStateController[NewsSearchParams]):
    def __init__(self, defaults: NewsSearchParams | None = None) -> None:
        super().__init__(defaults or NewsSearchParams())
