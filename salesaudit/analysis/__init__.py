from salesaudit.analysis.analyzer import Analyzer
from salesaudit.analysis.base import BaseAnalyzer
from salesaudit.analysis.chat import AuditChat
from salesaudit.analysis.factory import AnalyzerFactory

__all__ = ["Analyzer", "AnalyzerFactory", "AuditChat", "BaseAnalyzer"]
