"""JSON 텍스트 컬럼에 저장되는 문자열 리스트 직렬화 헬퍼입니다."""

import json
from typing import Iterable, List, Optional


def load_str_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if not isinstance(parsed, list):
        return []
    return [str(item) for item in parsed if str(item).strip()]


def dump_str_list(values: Optional[Iterable[str]]) -> str:
    items = [str(item).strip() for item in (values or []) if str(item).strip()]
    return json.dumps(items, ensure_ascii=False)
