"""Default key builder implementation."""

from typing import Any

from tourquery.core.entities.query_key import QueryKey


class DefaultKeyBuilder:
    """Default key builder producing canonical, order-independent keys.

    Parameters are normalized (sorted by name, ``None`` fields dropped)
    so that two deeply equal parameter sets always yield the same key.
    Values that cannot be represented deterministically raise
    ``KeyBuildError`` instead of producing an ambiguous key.
    """

    def build(
        self,
        domain: str,
        params: Any = None,
        *scope: Any,
    ) -> QueryKey:
        """Build the query key for a read.

        Args:
            domain: The data domain (e.g. ``"hotels"``).
            params: Optional parameter mapping or dataclass.
            *scope: Optional scope segments inside the domain.

        Returns:
            A hashable, comparable QueryKey.
        """
        return QueryKey.from_components(domain, params, *scope)

    def build_search_key(self, domain: str, params: Any) -> QueryKey:
        """Build the key of a paginated search in ``domain``."""
        return self.build(domain, params, "search")

    def build_detail_key(self, domain: str, item_id: str) -> QueryKey:
        """Build the key of a single item lookup in ``domain``."""
        return self.build(domain, None, "detail", item_id)
