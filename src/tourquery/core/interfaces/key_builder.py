"""Key builder interface."""

from typing import Any, Protocol

from tourquery.core.entities.query_key import QueryKey


class IKeyBuilder(Protocol):
    """Contract for building query keys from a domain and its parameters.

    Key builders must be total over JSON-like parameter structures and
    deterministic: parameter sets that are deeply equal, regardless of
    insertion order, produce equal keys.
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

        Raises:
            KeyBuildError: If the parameters cannot be normalized.
        """
        ...

    def build_search_key(self, domain: str, params: Any) -> QueryKey:
        """Build the key of a paginated search in ``domain``."""
        ...

    def build_detail_key(self, domain: str, item_id: str) -> QueryKey:
        """Build the key of a single item lookup in ``domain``."""
        ...
