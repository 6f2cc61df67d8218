"""Query key value object."""

from dataclasses import dataclass
from typing import Any

from tourquery.utils.hashing import hash_value, normalize_params


@dataclass(frozen=True)
class QueryKey:
    """Immutable, hashable identity of a cached read.

    A key is the data domain (``"hotels"``), a scope path inside that
    domain (``("search",)``, ``("detail", "42")``) and the canonical form
    of the parameters that shaped the request.
    """

    domain: str
    scope: tuple[str, ...] = ()
    params: Any = ()

    def __str__(self) -> str:
        """Return a readable key string for logs.

        Returns:
            ``domain:scope...:hash`` with the hash omitted for
            parameterless keys.
        """
        parts = [self.domain, *self.scope]
        if self.params:
            parts.append(hash_value(self.params))
        return ":".join(parts)

    def matches(self, domain: str, *scope: str) -> bool:
        """Check whether this key lies under ``domain`` and ``scope`` prefix.

        Args:
            domain: The domain to match.
            *scope: Optional leading scope segments to match.

        Returns:
            True if the key starts with the given prefix.
        """
        if self.domain != domain:
            return False
        return self.scope[: len(scope)] == scope

    @classmethod
    def from_components(
        cls,
        domain: str,
        params: Any = None,
        *scope: Any,
    ) -> "QueryKey":
        """Create a QueryKey from raw components.

        Args:
            domain: The data domain name.
            params: Parameter mapping or dataclass; normalized before use.
            *scope: Scope segments, converted to strings.

        Returns:
            A new QueryKey instance.
        """
        normalized = normalize_params(params) if params is not None else ()
        return cls(
            domain=domain,
            scope=tuple(str(part) for part in scope),
            params=normalized,
        )
