# ABOUTME: Holds the tunable knobs of the analytics engine (vocabulary, thresholds, catalog).
# ABOUTME: Loads overrides from YAML so other taxonomies can reuse the same algorithms.

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Tuple

import yaml

from .schemas import CATEGORY_NAMES


@dataclass(frozen=True)
class AlertThresholds:
    min_observations: int = 3
    window_size: int = 3
    decline_margin: float = 0.5
    decline_medium: float = 0.7
    decline_high: float = 1.0
    low_score: float = 2.5
    low_score_medium: float = 2.0
    low_score_high: float = 1.5
    detect_improvement: bool = False


@dataclass(frozen=True)
class RecommendationRule:
    min_score: float
    max_score: float
    recommendation: str
    activity: str
    resources: Tuple[str, ...]

    def matches(self, score: float) -> bool:
        return self.min_score <= score <= self.max_score


def _rule(min_score, max_score, recommendation, activity, resources) -> RecommendationRule:
    return RecommendationRule(min_score, max_score, recommendation, activity, tuple(resources))


DEFAULT_CATALOG: Dict[str, Tuple[RecommendationRule, ...]] = {
    "Cognitive Skills": (
        _rule(
            1, 2,
            "Focus on foundational problem-solving skills",
            "One-on-one problem-solving sessions",
            ["Math manipulatives", "Logic puzzles", "Step-by-step guides"],
        ),
        _rule(
            2, 3,
            "Build critical thinking through guided activities",
            "Small group problem-solving activities",
            ["Brain teasers", "Strategy games", "Discussion prompts"],
        ),
    ),
    "Social Skills": (
        _rule(
            1, 2,
            "Develop basic social interaction skills",
            "Structured group activities with clear roles",
            ["Social stories", "Role-playing scenarios", "Team building games"],
        ),
        _rule(
            2, 3,
            "Enhance collaboration and communication",
            "Partner and small group projects",
            ["Collaborative games", "Communication exercises", "Peer mentoring"],
        ),
    ),
    "Emotional Readiness": (
        _rule(
            1, 2,
            "Build emotional awareness and regulation",
            "Mindfulness and emotional literacy activities",
            ["Emotion cards", "Breathing exercises", "Calm-down strategies"],
        ),
        _rule(
            2, 3,
            "Strengthen resilience and self-confidence",
            "Goal-setting and achievement activities",
            ["Confidence-building exercises", "Growth mindset activities", "Success journals"],
        ),
    ),
    "Communication": (
        _rule(
            1, 2,
            "Develop basic communication skills",
            "Structured speaking and listening activities",
            ["Picture cards", "Sentence starters", "Listening games"],
        ),
        _rule(
            2, 3,
            "Enhance verbal and non-verbal communication",
            "Presentation and discussion activities",
            ["Public speaking exercises", "Body language activities", "Active listening practice"],
        ),
    ),
    "Creativity": (
        _rule(
            1, 2,
            "Encourage creative expression and imagination",
            "Open-ended art and creative projects",
            ["Art supplies", "Creative prompts", "Imagination games"],
        ),
        _rule(
            2, 3,
            "Foster innovative thinking and originality",
            "Creative problem-solving challenges",
            ["Innovation challenges", "Creative thinking exercises", "Design thinking activities"],
        ),
    ),
}


@dataclass(frozen=True)
class AnalyticsConfig:
    """
    Explicit configuration passed into every analytics operation.

    `categories` drives the percentile, alert and summary iteration order;
    `timezone` is the zone in which week/month buckets are cut.
    """

    categories: Tuple[str, ...] = CATEGORY_NAMES
    thresholds: AlertThresholds = field(default_factory=AlertThresholds)
    catalog: Mapping[str, Tuple[RecommendationRule, ...]] = field(default_factory=lambda: dict(DEFAULT_CATALOG))
    timezone: str = "UTC"


DEFAULT_CONFIG = AnalyticsConfig()


def resolve_config(config: AnalyticsConfig | None) -> AnalyticsConfig:
    return DEFAULT_CONFIG if config is None else config


def load_config(path: Path) -> AnalyticsConfig:
    """
    Load an AnalyticsConfig from YAML.

    Recognized top-level keys: `categories`, `timezone`, `alerts`, `recommendations`.
    Absent keys keep their defaults.
    """

    with open(path) as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config root in {path} must be a mapping.")
    return config_from_mapping(cfg)


def config_from_mapping(cfg: Mapping) -> AnalyticsConfig:
    categories = cfg.get("categories", list(CATEGORY_NAMES))
    if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
        raise ValueError("Config section 'categories' must be a list of strings.")

    timezone = cfg.get("timezone", "UTC")
    if not isinstance(timezone, str):
        raise ValueError("Config section 'timezone' must be a string.")

    return AnalyticsConfig(
        categories=tuple(categories),
        thresholds=_parse_thresholds(cfg.get("alerts") or {}),
        catalog=_parse_catalog(cfg["recommendations"]) if "recommendations" in cfg else dict(DEFAULT_CATALOG),
        timezone=timezone,
    )


def _parse_thresholds(section: Mapping) -> AlertThresholds:
    if not isinstance(section, dict):
        raise ValueError("Config section 'alerts' must be a mapping.")
    known = {f.name for f in fields(AlertThresholds)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"Unknown keys in config section 'alerts': {', '.join(unknown)}.")

    values = {}
    for f in fields(AlertThresholds):
        if f.name not in section:
            continue
        raw = section[f.name]
        kind = type(f.default)
        # YAML hands back native ints, floats and bools; strings are not coerced.
        valid = isinstance(raw, bool) if kind is bool else isinstance(raw, (int, float)) and not isinstance(raw, bool)
        if not valid or (kind is int and isinstance(raw, float) and not raw.is_integer()):
            raise ValueError(f"Config section 'alerts' key '{f.name}' must be {kind.__name__}, got {raw!r}.")
        values[f.name] = kind(raw)

    thresholds = AlertThresholds(**values)
    for name in ("min_observations", "window_size"):
        if getattr(thresholds, name) < 1:
            raise ValueError(f"Config section 'alerts' key '{name}' must be at least 1.")
    return thresholds


def _parse_catalog(section: Mapping) -> Dict[str, Tuple[RecommendationRule, ...]]:
    if not isinstance(section, dict):
        raise ValueError("Config section 'recommendations' must map category names to rule lists.")

    catalog: Dict[str, Tuple[RecommendationRule, ...]] = {}
    for category, rules in section.items():
        if not isinstance(rules, list):
            raise ValueError(f"Recommendation rules for '{category}' must be a list.")
        parsed: List[RecommendationRule] = []
        for raw in rules:
            try:
                parsed.append(
                    _rule(
                        float(raw["min_score"]),
                        float(raw["max_score"]),
                        str(raw["recommendation"]),
                        str(raw["activity"]),
                        _as_strings(raw.get("resources", [])),
                    )
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"Invalid recommendation rule for '{category}': {raw!r}") from exc
        catalog[category] = tuple(parsed)
    return catalog


def _as_strings(values: Sequence) -> List[str]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise TypeError("resources must be a list")
    return [str(v) for v in values]
