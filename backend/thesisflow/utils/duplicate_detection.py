"""초록(abstract) 유사도 기반 중복 과제 탐지 유틸리티입니다."""

import re
from typing import Any, Dict, Iterable, Optional, Set

PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")
MIN_TOKEN_LENGTH = 3


def tokenize(text: Optional[str]) -> Set[str]:
    if not text:
        return set()
    cleaned = PUNCTUATION_PATTERN.sub(" ", text.lower())
    return {token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH}


def calculate_similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    """두 텍스트의 토큰 집합 Jaccard 지수를 백분율(0~100)로 반환한다."""
    tokens_a = tokenize(text_a)
    tokens_b = tokenize(text_b)
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) * 100 / len(union)


def check_duplicate(new_abstract: Optional[str], corpus: Iterable[Any], threshold: float = 60) -> Dict[str, Any]:
    """corpus 의 각 항목(abstract 속성 보유)과 비교한다.

    threshold 이상인 항목을 유사도 내림차순으로 모으고, 임계치 미만을 포함한 전체 최고 유사도를 함께 반환한다.
    판정은 참고용이며 제출을 막지 않는다.
    """
    matches = []
    highest = 0.0
    if not new_abstract:
        return {"is_duplicate": False, "matches": matches, "highest_match": 0}

    for entry in corpus:
        abstract = getattr(entry, "abstract", None)
        if not abstract:
            continue
        similarity = calculate_similarity(new_abstract, abstract)
        if similarity >= threshold:
            matches.append(
                {
                    "project_id": entry.project_id,
                    "title": entry.title,
                    "year": getattr(entry, "year", None),
                    "similarity": round(similarity, 2),
                }
            )
        if similarity > highest:
            highest = similarity

    matches.sort(key=lambda row: row["similarity"], reverse=True)
    return {
        "is_duplicate": bool(matches),
        "matches": matches,
        "highest_match": round(highest, 2),
    }
