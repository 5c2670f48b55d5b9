from .orchestrator import Orchestrator, select_commands
from .types import NoMatchError, OrchestratorError, RunSummary

__all__ = [
    "Orchestrator",
    "select_commands",
    "NoMatchError",
    "OrchestratorError",
    "RunSummary",
]
