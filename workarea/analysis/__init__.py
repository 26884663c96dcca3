"""
Analysis modules for the Work Area Coverage Engine
"""

from .geometry_utils import GeometryUtils
from .classifier import RecordClassifier
from .containment import ContainmentFilter
from .completeness import CompletenessScorer
from .guidance import GuidanceReporter

__all__ = [
    "GeometryUtils",
    "RecordClassifier",
    "ContainmentFilter",
    "CompletenessScorer",
    "GuidanceReporter",
]
