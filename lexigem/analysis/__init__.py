from lexigem.analysis.analyzer import DocumentAnalyzer
from lexigem.analysis.models import AnalysisResult, Authenticity

__all__ = ["AnalysisResult", "Authenticity", "DocumentAnalyzer"]
