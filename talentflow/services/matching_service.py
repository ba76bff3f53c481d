"""
Skill Matching & Applicant Ranking Service

PURPOSE:
Score students against internships and rank applicants for a company's
review queue.

HOW IT WORKS:
1. Normalize skills from every source (declared + extracted) into one set
2. Compare the set against the internship's required skills
3. Blend match %, resume score and skill density into a final score
4. Sort applicants by final score and badge the top positions

Everything here is a pure function over in-memory values. Callers load
the current student/internship snapshot, call these functions, and
throw the results away after rendering. Nothing is cached or stored.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from numbers import Real
from typing import Iterable, List, NamedTuple, Optional, Set

from pydantic import BaseModel, Field


# ============================================================
# POLICY CONSTANTS
# ============================================================

MATCH_WEIGHT = 0.5
RESUME_WEIGHT = 0.3
DENSITY_WEIGHT = 0.2

# Skill density is reported as skills per this many words
DENSITY_WORD_BASE = 100


class ScoreWeights(NamedTuple):
    """Weights used by composite_score(). Must sum to 1.0."""
    match: float = MATCH_WEIGHT
    resume: float = RESUME_WEIGHT
    density: float = DENSITY_WEIGHT


DEFAULT_WEIGHTS = ScoreWeights()


class RankingBadge(str, Enum):
    top = "top"
    strong = "strong"
    potential = "potential"


class InvalidScoreInputError(ValueError):
    """A numeric scoring input is not a finite, non-negative number."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be a finite non-negative number, got {value!r}")


# ============================================================
# RESULT TYPES
# ============================================================

class MatchResult(BaseModel):
    match_percentage: int = 0
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)


class CandidateScore(BaseModel):
    candidate_id: Optional[str] = None
    match_percentage: int = 0
    resume_score: float = 0
    skill_density: float = 0
    final_score: float = 0


class RankedApplicant(CandidateScore):
    rank: int
    ranking_badge: RankingBadge


# ============================================================
# ROUNDING HELPERS
# ============================================================

def round_half_up(value: float, places: int = 0) -> float:
    """Round like a calculator does: 0.5 always goes up."""
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def round2(value: float) -> float:
    return round_half_up(value, 2)


def _require_score_input(field: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidScoreInputError(field, value)
    if not math.isfinite(value) or value < 0:
        raise InvalidScoreInputError(field, value)
    return float(value)


# ============================================================
# SKILL NORMALIZER
# ============================================================

def normalize_skills(*sources: Optional[Iterable[str]]) -> Set[str]:
    """
    Merge skill lists into one lower-cased, deduplicated set.

    None or empty sources count as empty lists. Blank tokens are dropped.

    Example:
        normalize_skills(["React", "SQL"], ["react", " Docker "])
        -> {"react", "sql", "docker"}
    """
    merged = set()
    for source in sources:
        for skill in source or []:
            token = str(skill).strip().lower()
            if token:
                merged.add(token)
    return merged


# ============================================================
# MATCH CALCULATOR
# ============================================================

def calculate_match(
    candidate_skills: Optional[Iterable[str]],
    required_skills: Optional[List[str]]
) -> MatchResult:
    """
    Compare a candidate's skills with an internship's required skills.

    Args:
        candidate_skills: Candidate skill set (any casing)
        required_skills: Skills as authored by the company, in order

    Returns:
        MatchResult. Matched/missing keep the company's casing and order.
        An internship with no requirements always scores 0.
    """
    required = list(required_skills or [])
    if not required:
        return MatchResult()

    candidate_set = normalize_skills(candidate_skills)

    matched = [s for s in required if str(s).strip().lower() in candidate_set]
    missing = [s for s in required if str(s).strip().lower() not in candidate_set]

    percentage = int(round_half_up(100 * len(matched) / len(required)))

    return MatchResult(
        match_percentage=percentage,
        matched_skills=matched,
        missing_skills=missing
    )


# ============================================================
# COMPOSITE SCORER
# ============================================================

def skill_density(skills: Optional[Iterable[str]], resume_text: Optional[str]) -> float:
    """
    Distinct skills per 100 words of resume text, 2 decimals.

    Returns 0 when there is no resume text or it has no words.
    """
    if not resume_text:
        return 0.0
    word_count = len(resume_text.split())
    if word_count == 0:
        return 0.0
    skill_count = len(normalize_skills(skills))
    return round2(skill_count / word_count * DENSITY_WORD_BASE)


def composite_score(
    match_percentage: float,
    resume_score: float,
    skill_density: float,
    weights: ScoreWeights = DEFAULT_WEIGHTS
) -> float:
    """
    Blend the three ranking signals into one final score.

    final = round2(match * w.match + resume * w.resume + density * w.density)

    Raises:
        InvalidScoreInputError: if any input is NaN, infinite, negative
        or not a number
    """
    match_percentage = _require_score_input("match_percentage", match_percentage)
    resume_score = _require_score_input("resume_score", resume_score)
    skill_density = _require_score_input("skill_density", skill_density)

    return round2(
        match_percentage * weights.match +
        resume_score * weights.resume +
        skill_density * weights.density
    )


def score_candidate(
    candidate_id: Optional[str],
    match_percentage: int,
    resume_score: float,
    skill_density: float,
    weights: ScoreWeights = DEFAULT_WEIGHTS
) -> CandidateScore:
    """Build a CandidateScore with its final score filled in."""
    final = composite_score(match_percentage, resume_score, skill_density, weights)
    return CandidateScore(
        candidate_id=candidate_id,
        match_percentage=match_percentage,
        resume_score=float(resume_score),
        skill_density=float(skill_density),
        final_score=final
    )


# ============================================================
# RANKER
# ============================================================

def badge_for_position(position: int) -> RankingBadge:
    if position == 0:
        return RankingBadge.top
    if position == 1:
        return RankingBadge.strong
    return RankingBadge.potential


def rank_candidates(candidates: Optional[List[CandidateScore]]) -> List[RankedApplicant]:
    """
    Sort candidates by final score (highest first) and assign badges.

    Candidates with equal scores keep their input order; sorted() is
    stable even with reverse=True. Badges depend on position only:
    the first entry is always "top", even in a list of one.
    The input list is left untouched; None ranks as an empty list.
    """
    ordered = sorted(candidates or [], key=lambda c: c.final_score, reverse=True)
    return [
        RankedApplicant(
            **candidate.model_dump(),
            rank=position + 1,
            ranking_badge=badge_for_position(position)
        )
        for position, candidate in enumerate(ordered)
    ]
