"""Current-save state holder and overview extraction."""

from jominisave.state.store import ExportResult, SaveState, SaveStateStore, StateResult
from jominisave.state.summary import UNKNOWN_PLANET_NAME, PlanetSummary, SaveSummary, summarize

__all__ = [
    "UNKNOWN_PLANET_NAME",
    "ExportResult",
    "PlanetSummary",
    "SaveState",
    "SaveStateStore",
    "SaveSummary",
    "StateResult",
    "summarize",
]
