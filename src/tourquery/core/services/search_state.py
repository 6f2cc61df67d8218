"""Search-state controller for paginated, filterable searches."""

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from tourquery.errors import ValidationError

P = TypeVar("P")

PAGINATION_FIELD = "offset"


def merge_search_params(current: P, changes: Mapping[str, Any]) -> P:
    """Merge a partial update into a search parameter set.

    Changing any field other than ``offset`` returns the search to the
    first page: ``offset`` becomes 0 unless the same update also sets it
    explicitly. An update that only sets ``offset`` is applied as is.

    Args:
        current: The current frozen dataclass of parameters.
        changes: Field names mapped to new values.

    Returns:
        A new parameter set; ``current`` is not modified.

    Raises:
        ValidationError: If ``changes`` names a field the parameter set
            does not have.
    """
    names = {f.name for f in dataclasses.fields(current)}  # type: ignore[arg-type]
    unknown = sorted(set(changes) - names)
    if unknown:
        raise ValidationError(
            f"Unknown search parameters for {type(current).__name__}: "
            + ", ".join(unknown)
        )
    if not changes:
        return current

    updates = dict(changes)
    if set(updates) - {PAGINATION_FIELD}:
        updates.setdefault(PAGINATION_FIELD, 0)
    return dataclasses.replace(current, **updates)  # type: ignore[type-var]


class SearchStateController(Generic[P]):
    """Holds the filter and pagination parameters of one search view.

    Parameters are immutable dataclasses; every update replaces them and
    notifies subscribers with the new set.
    """

    def __init__(self, defaults: P) -> None:
        """Initialize the controller.

        Args:
            defaults: The parameter set restored by :meth:`reset`.
        """
        self._defaults = defaults
        self._params = defaults
        self._listeners: list[Callable[[P], None]] = []

    @property
    def params(self) -> P:
        return self._params

    @property
    def defaults(self) -> P:
        return self._defaults

    def update(self, changes: Mapping[str, Any] | None = None, **fields: Any) -> P:
        """Merge a partial update into the current parameters.

        Args:
            changes: Optional mapping of field names to new values.
            **fields: Field updates as keyword arguments.

        Returns:
            The new parameters.
        """
        merged = {**(changes or {}), **fields}
        return self._set(merge_search_params(self._params, merged))

    def reset(self) -> P:
        """Restore the default parameters."""
        return self._set(self._defaults)

    def subscribe(self, listener: Callable[[P], None]) -> Callable[[], None]:
        """Register a listener called with every new parameter set.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, params: P) -> P:
        if params == self._params:
            return params
        self._params = params
        for listener in list(self._listeners):
            listener(params)
        return params
