"""Flow services: safety rules, image enrichment, practice and the studio."""

from .enrichment import EnrichmentReport, ImageEnricher
from .practice import PracticeSession, SessionState
from .safety import SafetyCheck, check_anatomical_safety, safety_report
from .studio import AppStatus, FlowStudio

__all__ = [
    "AppStatus",
    "EnrichmentReport",
    "FlowStudio",
    "ImageEnricher",
    "PracticeSession",
    "SafetyCheck",
    "SessionState",
    "check_anatomical_safety",
    "safety_report",
]
