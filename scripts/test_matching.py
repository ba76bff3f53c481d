#!/usr/bin/env python3
"""
Skill Matching & Ranking Test Script

Tests:
1. Skill normalization (multiple sources, casing, duplicates)
2. Match percentage and matched/missing skills
3. Skill density and composite final score
4. Applicant ranking and badges

No database needed - everything here is pure computation.

Run: python scripts/test_matching.py   (or: pytest scripts/test_matching.py)
"""
import sys
sys.path.insert(0, '.')

import math

import pytest

from talentflow.services.matching_service import (
    CandidateScore,
    InvalidScoreInputError,
    RankingBadge,
    ScoreWeights,
    calculate_match,
    composite_score,
    normalize_skills,
    rank_candidates,
    round_half_up,
    score_candidate,
    skill_density,
    MATCH_WEIGHT,
    RESUME_WEIGHT,
    DENSITY_WEIGHT,
)


def _candidates(*final_scores):
    return [
        CandidateScore(candidate_id=f"c{i}", final_score=score)
        for i, score in enumerate(final_scores)
    ]


# ============================================================
# SKILL NORMALIZER
# ============================================================

def test_normalize_merges_sources():
    """Declared and extracted skills collapse into one lowercase set."""
    skills = normalize_skills(["React", "SQL"], ["react", " Docker "], ["sql"])
    assert skills == {"react", "sql", "docker"}


def test_normalize_treats_missing_sources_as_empty():
    assert normalize_skills() == set()
    assert normalize_skills(None, []) == set()
    assert normalize_skills(None, ["Python"]) == {"python"}


def test_normalize_drops_blank_tokens():
    assert normalize_skills(["", "  ", "Git"]) == {"git"}


# ============================================================
# MATCH CALCULATOR
# ============================================================

def test_partial_match_keeps_required_order():
    """Scenario: 1 of 3 required skills -> 33%."""
    result = calculate_match({"react", "python"}, ["react", "node", "sql"])
    print(f"    Partial match: {result.match_percentage}% (expected: 33%)")
    assert result.match_percentage == 33
    assert result.matched_skills == ["react"]
    assert result.missing_skills == ["node", "sql"]


def test_no_requirements_is_zero_match():
    """An internship without requirements cannot be matched."""
    result = calculate_match({"react"}, [])
    assert result.match_percentage == 0
    assert result.matched_skills == []
    assert result.missing_skills == []

    assert calculate_match(set(), None).match_percentage == 0
    assert calculate_match(None, []).match_percentage == 0


def test_superset_is_full_match_case_insensitive():
    result = calculate_match({"python", "javascript", "docker", "git"}, ["Python", "JavaScript", "docker"])
    assert result.match_percentage == 100
    assert result.missing_skills == []
    # Company's casing is kept for display
    assert result.matched_skills == ["Python", "JavaScript", "docker"]


def test_disjoint_is_zero_match():
    result = calculate_match({"ruby", "rails"}, ["Python", "Django"])
    assert result.match_percentage == 0
    assert result.matched_skills == []
    assert result.missing_skills == ["Python", "Django"]


def test_candidate_casing_does_not_matter():
    result = calculate_match(["PYTHON", "Sql"], ["python", "SQL", "AWS"])
    assert result.matched_skills == ["python", "SQL"]
    assert result.missing_skills == ["AWS"]
    assert result.match_percentage == 67


def test_percentage_rounds_half_up():
    # 1 of 8 = 12.5% -> 13, 5 of 8 = 62.5% -> 63
    required = ["a", "b", "c", "d", "e", "f", "g", "h"]
    assert calculate_match({"a"}, required).match_percentage == 13
    assert calculate_match({"a", "b", "c", "d", "e"}, required).match_percentage == 63


def test_matched_and_missing_partition_requirements():
    required = ["Python", "SQL", "Docker", "AWS", "Git"]
    for candidate in [set(), {"python"}, {"sql", "git"}, {"python", "sql", "docker", "aws", "git"}]:
        result = calculate_match(candidate, required)
        assert len(result.matched_skills) + len(result.missing_skills) == len(required)
        assert set(result.matched_skills) | set(result.missing_skills) == set(required)
        assert not set(result.matched_skills) & set(result.missing_skills)


def test_match_is_repeatable():
    candidate = {"python", "sql"}
    required = ["Python", "SQL", "Docker"]
    assert calculate_match(candidate, required) == calculate_match(candidate, required)
    assert required == ["Python", "SQL", "Docker"]


# ============================================================
# COMPOSITE SCORER
# ============================================================

def test_weights_sum_to_one():
    assert math.isclose(MATCH_WEIGHT + RESUME_WEIGHT + DENSITY_WEIGHT, 1.0)
    assert ScoreWeights() == (0.5, 0.3, 0.2)


def test_final_score_example():
    """80 match, 60 resume, 10 density -> 40 + 18 + 2 = 60.00"""
    score = composite_score(80, 60, 10)
    print(f"    Final score: {score} (expected: 60.0)")
    assert score == 60.0


def test_final_score_rounds_to_two_decimals():
    # 33*0.5 + 71*0.3 + 4.67*0.2 = 16.5 + 21.3 + 0.934 = 38.734
    assert composite_score(33, 71, 4.67) == 38.73


def test_final_score_is_monotonic_in_each_input():
    base = (50, 50, 5)
    for index in range(3):
        previous = composite_score(*base)
        for step in range(1, 6):
            inputs = list(base)
            inputs[index] += step * 7
            current = composite_score(*inputs)
            assert current >= previous
            previous = current


def test_custom_weights():
    weights = ScoreWeights(match=1.0, resume=0.0, density=0.0)
    assert composite_score(42, 99, 99, weights) == 42.0


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf"), -1, "60", None, True])
def test_invalid_resume_score_is_rejected(bad):
    with pytest.raises(InvalidScoreInputError) as exc_info:
        composite_score(80, bad, 10)
    assert exc_info.value.field == "resume_score"


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), -0.5])
def test_invalid_skill_density_is_rejected(bad):
    with pytest.raises(InvalidScoreInputError):
        composite_score(80, 60, bad)


def test_invalid_input_error_is_a_value_error():
    with pytest.raises(ValueError):
        composite_score(float("nan"), 0, 0)


def test_skill_density():
    # 3 skills in 30 words -> 10 per 100 words
    text = " ".join(["word"] * 30)
    assert skill_density(["python", "sql", "git"], text) == 10.0
    # duplicates across casing count once
    assert skill_density(["Python", "python", "SQL"], text) == round_half_up(2 / 30 * 100, 2)


def test_skill_density_zero_guard():
    assert skill_density(["python"], None) == 0
    assert skill_density(["python"], "") == 0
    assert skill_density(["python"], "   \n\t ") == 0
    assert skill_density([], "some resume text") == 0


def test_score_candidate_fills_final_score():
    score = score_candidate("s1", 80, 60, 10)
    assert score.candidate_id == "s1"
    assert score.final_score == 60.0


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(1.005, 2) == 1.01
    assert round_half_up(33.333, 1) == 33.3


# ============================================================
# RANKER
# ============================================================

def test_rank_ties_keep_input_order():
    """Scores [90, 90, 70]: tied candidates stay in input order."""
    ranked = rank_candidates(_candidates(90, 90, 70))
    assert [r.candidate_id for r in ranked] == ["c0", "c1", "c2"]
    assert [r.ranking_badge for r in ranked] == [RankingBadge.top, RankingBadge.strong, RankingBadge.potential]
    assert [r.rank for r in ranked] == [1, 2, 3]


def test_rank_sorts_descending():
    ranked = rank_candidates(_candidates(10, 70.5, 55, 70.5, 99))
    assert [r.candidate_id for r in ranked] == ["c4", "c1", "c3", "c2", "c0"]
    assert [r.final_score for r in ranked] == [99, 70.5, 70.5, 55, 10]


def test_rank_badge_counts():
    for size in range(0, 7):
        ranked = rank_candidates(_candidates(*range(size)))
        badges = [r.ranking_badge for r in ranked]
        assert badges.count(RankingBadge.top) == (1 if size else 0)
        assert badges.count(RankingBadge.strong) <= 1
        assert badges.count(RankingBadge.potential) == max(0, size - 2)


def test_single_candidate_is_always_top():
    ranked = rank_candidates(_candidates(3.5))
    assert ranked[0].ranking_badge == RankingBadge.top


def test_rank_does_not_mutate_input():
    candidates = _candidates(20, 80, 50)
    before = [c.model_copy() for c in candidates]
    rank_candidates(candidates)
    assert candidates == before


def test_rank_empty_list():
    assert rank_candidates([]) == []
    assert rank_candidates(None) == []


def main():
    print("=" * 60)
    print("SKILL MATCHING & RANKING TEST")
    print("=" * 60)

    tests = [
        value for name, value in sorted(globals().items())
        if name.startswith("test_") and callable(value) and not hasattr(value, "pytestmark")
    ]
    for test in tests:
        print(f"\n[{test.__name__}]")
        test()
        print("    ✅ passed")

    print("\n" + "=" * 60)
    print("✅ ALL MATCHING TESTS PASSED! (parametrized tests: run with pytest)")
    print("=" * 60)


if __name__ == "__main__":
    main()
