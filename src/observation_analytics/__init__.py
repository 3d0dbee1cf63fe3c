# ABOUTME: Makes the observation analytics engine importable as one package.
# ABOUTME: Re-exports record types and the four analytics passes for convenience.

from .schemas import (
    CATEGORY_NAMES,
    CategoryScore,
    InterventionAlert,
    ObservationRecord,
    PeerComparison,
    Recommendation,
    StudentSummary,
    TrendData,
)
from .config import AnalyticsConfig, AlertThresholds, RecommendationRule, load_config
from .trends import calculate_trends
from .peer_comparison import calculate_peer_comparison
from .alerts import generate_intervention_alerts
from .recommendation import generate_recommendations
from .pipeline import AnalyticsReport, run_analytics

__all__ = [
    "CATEGORY_NAMES",
    "AlertThresholds",
    "AnalyticsConfig",
    "AnalyticsReport",
    "CategoryScore",
    "InterventionAlert",
    "ObservationRecord",
    "PeerComparison",
    "Recommendation",
    "RecommendationRule",
    "StudentSummary",
    "TrendData",
    "calculate_peer_comparison",
    "calculate_trends",
    "generate_intervention_alerts",
    "generate_recommendations",
    "load_config",
    "run_analytics",
]
