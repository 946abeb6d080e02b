"""스킬 매칭 점수 계산 규칙을 검증하는 단위 테스트입니다."""

from types import SimpleNamespace

from thesisflow.utils.team_matching import (
    calculate_match_score,
    find_matching_students,
    group_by_match_level,
    normalize_skills,
)


def _student(user_id, skills, name=None):
    return SimpleNamespace(user_id=user_id, name=name or f"s{user_id}", email=None, department=None, skills=skills)


def test_half_match_is_good_fit():
    result = calculate_match_score(["go", "react"], ["go", "react", "docker", "k8s"])
    assert result["score"] == 50
    assert result["matched_skills"] == ["go", "react"]
    assert result["missing_skills"] == ["docker", "k8s"]
    assert result["total_required"] == 4
    assert result["match_level"] == "good_fit"


def test_comparison_ignores_case_and_whitespace():
    result = calculate_match_score(["  PYTHON ", "Go"], ["python", " go "])
    assert result["score"] == 100
    assert result["match_level"] == "best_fit"


def test_no_requirements():
    result = calculate_match_score(["go"], [])
    assert result == {
        "score": 0,
        "matched_skills": [],
        "missing_skills": [],
        "total_required": 0,
        "match_level": "no_requirements",
    }


def test_student_without_skills_needs_training():
    result = calculate_match_score([], ["go", "rust"])
    assert result["score"] == 0
    assert result["missing_skills"] == ["go", "rust"]
    assert result["match_level"] == "needs_training"


def test_score_rounds_half_up_and_level_uses_rounded_score():
    # 2/3 = 66.67 -> 67 (good_fit), 1/3 = 33.33 -> 33
    assert calculate_match_score(["a", "b"], ["a", "b", "c"])["score"] == 67
    assert calculate_match_score(["a", "b"], ["a", "b", "c"])["match_level"] == "good_fit"
    assert calculate_match_score(["a"], ["a", "b", "c"])["score"] == 33
    # 1/8 = 12.5 -> 13
    assert calculate_match_score(["a"], list("abcdefgh"))["score"] == 13
    # 7/10 = 70 -> best_fit 경계
    assert calculate_match_score(list("abcdefg"), list("abcdefghij"))["match_level"] == "best_fit"


def test_duplicate_required_skills_are_counted_once():
    result = calculate_match_score(["go"], ["Go", "go", "rust"])
    assert result["total_required"] == 2
    assert result["score"] == 50


def test_normalize_skills_keeps_first_occurrence_order():
    assert normalize_skills(["React", " go", "react", "", None]) == ["react", "go"]


def test_find_matching_students_sorts_and_filters():
    students = [
        _student(3, ["go"]),
        _student(1, ["go", "react"]),
        _student(2, ["go", "react"]),
        _student(4, []),
    ]
    matches = find_matching_students(students, ["go", "react"], min_score=50)
    assert [m["student_id"] for m in matches] == [1, 2, 3]
    assert [m["score"] for m in matches] == [100, 100, 50]
    assert matches[0]["name"] == "s1"


def test_group_by_match_level_has_every_level():
    matches = find_matching_students([_student(1, ["go"])], ["go", "react", "docker"])
    grouped = group_by_match_level(matches)
    assert set(grouped) == {"best_fit", "good_fit", "needs_training"}
    assert [m["student_id"] for m in grouped["needs_training"]] == [1]
    assert grouped["best_fit"] == []
