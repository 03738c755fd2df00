"""FastAPI dependency injection."""

from propfolio.config import settings
from propfolio.models.policy import ReportPolicy, ScoringPolicy


def get_scoring_policy() -> ScoringPolicy:
    return ScoringPolicy.from_settings(settings)


def get_report_policy() -> ReportPolicy:
    return ReportPolicy.from_settings(settings)
