from .context import SettlementContext
from .preconditions import PreconditionStage
from .execution import ExecutionStage
from .recording import RecordingStage
from .pipeline import SettlementPipeline

__all__ = [
    "SettlementContext",
    "PreconditionStage",
    "ExecutionStage",
    "RecordingStage",
    "SettlementPipeline",
]
