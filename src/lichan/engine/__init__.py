"""External UCI engine client and shared search models."""

from lichan.engine.search import (
    IEngine,
    SearchLimits,
    SearchResult,
    pv_moves,
    result_from_info,
)
from lichan.engine.uci import EngineError, UciEngine

__all__ = [
    "EngineError",
    "IEngine",
    "SearchLimits",
    "SearchResult",
    "UciEngine",
    "pv_moves",
    "result_from_info",
]
