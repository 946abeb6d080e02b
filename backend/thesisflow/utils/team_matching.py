"""스킬 기반 팀 매칭 점수 계산 유틸리티입니다.

학생 스킬과 과제 요구 스킬을 대소문자/앞뒤 공백 무시로 비교해 0~100 점수와 매칭 등급을 산출합니다.
부수효과가 없는 순수 함수만 둡니다.
"""

import math
from typing import Any, Dict, Iterable, List, Optional

BEST_FIT = "best_fit"
GOOD_FIT = "good_fit"
NEEDS_TRAINING = "needs_training"
NO_REQUIREMENTS = "no_requirements"

MATCH_LEVELS = (BEST_FIT, GOOD_FIT, NEEDS_TRAINING)

BEST_FIT_MIN_SCORE = 70
GOOD_FIT_MIN_SCORE = 40


def normalize_skills(skills: Optional[Iterable[str]]) -> List[str]:
    """소문자/trim 후 빈 값과 중복을 제거한다. 입력 순서는 유지한다."""
    seen = set()
    normalized: List[str] = []
    for raw in skills or []:
        skill = str(raw or "").strip().lower()
        if not skill or skill in seen:
            continue
        seen.add(skill)
        normalized.append(skill)
    return normalized


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def match_level_for_score(score: int) -> str:
    if score >= BEST_FIT_MIN_SCORE:
        return BEST_FIT
    if score >= GOOD_FIT_MIN_SCORE:
        return GOOD_FIT
    return NEEDS_TRAINING


def calculate_match_score(student_skills: Optional[Iterable[str]], required_skills: Optional[Iterable[str]]) -> Dict[str, Any]:
    required = normalize_skills(required_skills)
    if not required:
        return {
            "score": 0,
            "matched_skills": [],
            "missing_skills": [],
            "total_required": 0,
            "match_level": NO_REQUIREMENTS,
        }

    owned = set(normalize_skills(student_skills))
    if not owned:
        return {
            "score": 0,
            "matched_skills": [],
            "missing_skills": required,
            "total_required": len(required),
            "match_level": NEEDS_TRAINING,
        }

    matched = [skill for skill in required if skill in owned]
    missing = [skill for skill in required if skill not in owned]
    score = _round_half_up(len(matched) / len(required) * 100)
    return {
        "score": score,
        "matched_skills": matched,
        "missing_skills": missing,
        "total_required": len(required),
        "match_level": match_level_for_score(score),
    }


def find_matching_students(students: Iterable[Any], required_skills: Iterable[str], min_score: int = 0) -> List[Dict[str, Any]]:
    """후보 학생 목록을 점수 내림차순(동점은 user_id 오름차순)으로 정렬해 반환한다."""
    required = list(required_skills or [])
    matches: List[Dict[str, Any]] = []
    for student in students:
        result = calculate_match_score(student.skills, required)
        if result["score"] < min_score:
            continue
        matches.append(
            {
                "student_id": student.user_id,
                "name": student.name,
                "email": student.email,
                "department": student.department,
                "skills": student.skills,
                **result,
            }
        )
    matches.sort(key=lambda row: (-row["score"], row["student_id"]))
    return matches


def group_by_match_level(matches: Iterable[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    grouped: Dict[str, List[Dict[str, Any]]] = {level: [] for level in MATCH_LEVELS}
    for row in matches:
        level = row.get("match_level")
        if level in grouped:
            grouped[level].append(row)
    return grouped
