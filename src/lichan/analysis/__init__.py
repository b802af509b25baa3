"""Engine-backed annotation of stored games."""

from lichan.analysis.models import GameAnalysisReport, PlyAnalysis
from lichan.analysis.pv import number_variation, variation_to_san
from lichan.analysis.service import GameAnalyzer

__all__ = [
    "GameAnalysisReport",
    "GameAnalyzer",
    "PlyAnalysis",
    "number_variation",
    "variation_to_san",
]
