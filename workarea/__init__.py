"""
Work Area Coverage Engine

Determines which expected utility record types are present inside a drawn
work area polygon, scores completeness and lists what is still missing.
"""

from .config import EngineConfig, get_config, validate_config
from .models import Point, Record, RecordFile, WorkAreaRequest, WorkAreaAnalysis, CompletenessResult
from .pipeline import WorkAreaAnalysisPipeline

__version__ = "1.0.0"

__all__ = [
    "EngineConfig",
    "get_config",
    "validate_config",
    "Point",
    "Record",
    "RecordFile",
    "WorkAreaRequest",
    "WorkAreaAnalysis",
    "CompletenessResult",
    "WorkAreaAnalysisPipeline",
]
