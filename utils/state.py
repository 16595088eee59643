"""
Search state for the lookup page.

`SearchState` is an immutable snapshot the templates render from. `SearchStore`
owns the current snapshot and only moves it through three transitions:
start, succeed and fail. Each start bumps a generation counter; a result
carrying an older generation is dropped, so a slow lookup can never
overwrite the outcome of a newer one.
"""

import threading
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from utils.errors import LookupFailure, ValidationError
from utils.logger import log_verbose
from utils.models import Entity, EvolutionStage, Resolution

EMPTY_QUERY_MESSAGE = "Por favor ingresa el nombre de un Pokémon"
ERROR_MESSAGE = "No se pudo encontrar el Pokémon o su cadena evolutiva"


def error_message(error: LookupFailure) -> str:
    """Every failure kind collapses to one user-facing line."""
    if isinstance(error, ValidationError):
        return EMPTY_QUERY_MESSAGE
    return ERROR_MESSAGE


@dataclass(frozen=True)
class SearchState:
    query: str = ""
    loading: bool = False
    error: str = ""
    entity: Optional[Entity] = None
    lineage: Tuple[EvolutionStage, ...] = ()
    generation: int = 0


class SearchStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._state = SearchState()

    @property
    def state(self) -> SearchState:
        with self._lock:
            return self._state

    def start(self, query: str) -> int:
        """SearchStarted: clear previous results and return the new generation token."""
        with self._lock:
            generation = self._state.generation + 1
            self._state = SearchState(query=query, loading=True, generation=generation)
            return generation

    def succeed(self, token: int, resolution: Resolution) -> bool:
        """SearchSucceeded; ignored (False) when a newer search has started."""
        with self._lock:
            if token != self._state.generation:
                log_verbose(f"dropping stale result (generation {token} < {self._state.generation})")
                return False
            self._state = replace(
                self._state,
                loading=False,
                error="",
                entity=resolution.entity,
                lineage=resolution.lineage,
            )
            return True

    def fail(self, token: int, error: LookupFailure) -> bool:
        """SearchFailed; clears entity and lineage together."""
        with self._lock:
            if token != self._state.generation:
                log_verbose(f"dropping stale failure (generation {token} < {self._state.generation})")
                return False
            self._state = replace(
                self._state,
                loading=False,
                error=error_message(error),
                entity=None,
                lineage=(),
            )
            return True
