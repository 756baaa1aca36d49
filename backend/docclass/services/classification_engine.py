"""
Weighted pattern-matching classification engine.

Pure, synchronous functions over already-fetched data:

1. Scorer: sums the weights of matching criteria per category
2. Selector: picks the category with the strictly greatest raw score
3. Confidence mapper: buckets the raw score and normalizes it into [0, 1]

Nothing here touches the database; see classification_service for the
orchestration that fetches inputs and records the outcome.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Pattern

from ..enums import ConfidenceLevel
from ..exceptions import NoMatchError

logger = logging.getLogger(__name__)

CLASSIFICATION_METHOD = "Pattern Matching"

# Raw thresholds are in additive weight units, not normalized units
HIGH_CONFIDENCE_THRESHOLD = 2.0
MEDIUM_CONFIDENCE_THRESHOLD = 1.0

# Fixed "strong evidence" total; independent of how many criteria exist.
# A raw score of 2.0 therefore normalizes to 0.667 while already being "high".
NORMALIZATION_DIVISOR = 3.0


@dataclass(frozen=True)
class CriterionRule:
    """One entry of the criteria index: a criterion flattened with its category id."""
    criterion_id: int
    category_id: int
    name: str
    pattern: str
    weight: float


@dataclass
class CategoryScore:
    category_id: int
    raw_score: float = 0.0
    matched: List[CriterionRule] = field(default_factory=list)


@dataclass(frozen=True)
class ConfidenceAssessment:
    level: ConfidenceLevel
    normalized_score: float


@dataclass
class EngineOutcome:
    """Winning category plus everything needed to record the result"""
    category_id: int
    raw_score: float
    confidence: ConfidenceAssessment
    matched: List[CriterionRule]

    @property
    def matched_names(self) -> List[str]:
        return [rule.name for rule in self.matched]

    @property
    def matched_ids(self) -> List[int]:
        return [rule.criterion_id for rule in self.matched]


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> Optional[Pattern]:
    """
    Compile a criterion pattern as a case-insensitive regex.

    Returns None for malformed patterns instead of raising, so callers can
    branch to the literal substring test. Cached, so a given pattern always
    takes the same branch.
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except (re.error, OverflowError, RecursionError) as e:
        logger.debug(f"Pattern {pattern!r} is not a valid regex ({e}); using substring match")
        return None


def pattern_matches(pattern: str, text_lower: str) -> bool:
    """Test one pattern against already lower-cased document text."""
    compiled = compile_pattern(pattern)
    if compiled is not None:
        return compiled.search(text_lower) is not None
    return pattern.lower() in text_lower


def score_categories(text: str, rules: Iterable[CriterionRule]) -> Dict[int, CategoryScore]:
    """
    Score the document text against every criterion.

    Returns only categories with at least one match, keyed by category id in
    the order each category first appears in ``rules``. Matched criteria keep
    the order of ``rules``.
    """
    text_lower = text.lower()
    scores: Dict[int, CategoryScore] = {}

    for rule in rules:
        if not pattern_matches(rule.pattern, text_lower):
            continue
        category_score = scores.get(rule.category_id)
        if category_score is None:
            category_score = scores[rule.category_id] = CategoryScore(category_id=rule.category_id)
        category_score.raw_score += rule.weight
        category_score.matched.append(rule)

    return scores


def select_category(scores: Mapping[int, float]) -> int:
    """
    Pick the category with the strictly greatest raw score.

    Ties keep the first-seen maximum, so the result depends on the mapping's
    iteration order (the criteria index order). Raises NoMatchError when no
    category scored above zero.
    """
    best_category_id: Optional[int] = None
    best_score = 0.0

    for category_id, raw_score in scores.items():
        if raw_score > best_score:
            best_score = raw_score
            best_category_id = category_id

    if best_category_id is None:
        raise NoMatchError()
    return best_category_id


def map_confidence(raw_score: float) -> ConfidenceAssessment:
    """
    Convert a positive raw score into a confidence level and a normalized score.

    >= 2.0 is high, >= 1.0 is medium, anything else above zero is low.
    The normalized score is raw / 3.0 capped at 1.0.
    """
    if raw_score <= 0:
        raise ValueError(f"raw_score must be positive, got {raw_score}")

    if raw_score >= HIGH_CONFIDENCE_THRESHOLD:
        level = ConfidenceLevel.HIGH
    elif raw_score >= MEDIUM_CONFIDENCE_THRESHOLD:
        level = ConfidenceLevel.MEDIUM
    else:
        level = ConfidenceLevel.LOW

    return ConfidenceAssessment(
        level=level,
        normalized_score=min(raw_score / NORMALIZATION_DIVISOR, 1.0),
    )


def run_classification(text: str, rules: Iterable[CriterionRule]) -> EngineOutcome:
    """Score, select and assess confidence in one pass."""
    scores = score_categories(text, rules)
    category_id = select_category(
        {category_id: score.raw_score for category_id, score in scores.items()}
    )
    winner = scores[category_id]

    return EngineOutcome(
        category_id=category_id,
        raw_score=winner.raw_score,
        confidence=map_confidence(winner.raw_score),
        matched=list(winner.matched),
    )
