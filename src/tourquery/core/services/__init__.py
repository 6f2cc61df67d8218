"""Domain services for tourquery."""

from tourquery.core.services.date_validation import (
    validate_date_range,
    validate_rental_dates,
)
from tourquery.core.services.debounce import Debouncer
from tourquery.core.services.debounced_query import DebouncedQuery
from tourquery.core.services.mutation_executor import MutationExecutor
from tourquery.core.services.query_client import QueryClient, unwrap_response
from tourquery.core.services.query_observer import QueryObserver
from tourquery.core.services.search_state import (
    SearchStateController,
    merge_search_params,
)

__all__ = [
    "QueryClient",
    "QueryObserver",
    "unwrap_response",
    "MutationExecutor",
    # Search state
    "SearchStateController",
    "merge_search_params",
    "Debouncer",
    "DebouncedQuery",
    # Validation
    "validate_date_range",
    "validate_rental_dates",
]
