"""Pydantic contracts shared by the analysis pipeline stages."""

from models.schemas.analysis_config import AnalysisConfig
from models.schemas.analysis_record import (
    AnalysisRecord,
    FileInfo,
    Improvement,
    ProcessingInfo,
    RecordCounters,
    SecurityAssessment,
)
from models.schemas.heuristic_extraction import HeuristicExtraction

__all__ = [
    "AnalysisConfig",
    "AnalysisRecord",
    "FileInfo",
    "HeuristicExtraction",
    "Improvement",
    "ProcessingInfo",
    "RecordCounters",
    "SecurityAssessment",
]
