"""과제 워크플로 상태와 전이 테이블 정의입니다.

전이는 (현재 상태, 액션) -> 다음 상태 형태의 명시적 테이블로 관리하며,
모듈 로드 시 중복 간선과 draft 에서 도달할 수 없는 상태를 검사합니다.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

DRAFT = "draft"
PENDING_PROPOSAL = "pending_proposal"
SUPERVISOR_REVIEW = "supervisor_review"
CHANGES_REQUESTED = "changes_requested"
APPROVED = "approved"
MID_DEFENSE = "mid_defense"
FINAL_SUBMISSION = "final_submission"
COMPLETED = "completed"
ARCHIVED = "archived"

ALL_STATUSES = (
    DRAFT,
    PENDING_PROPOSAL,
    SUPERVISOR_REVIEW,
    CHANGES_REQUESTED,
    APPROVED,
    MID_DEFENSE,
    FINAL_SUBMISSION,
    COMPLETED,
    ARCHIVED,
)
INITIAL_STATUS = DRAFT

ADVANCE = "advance"
APPROVE = "approve"
REQUEST_CHANGES = "request_changes"
REJECT = "reject"
REVIEW_ACTIONS = (APPROVE, REQUEST_CHANGES, REJECT)

# 지도교수가 검토 대기 목록에서 보게 되는 상태
AWAITING_SUPERVISOR = (SUPERVISOR_REVIEW, MID_DEFENSE, FINAL_SUBMISSION)

# 마일스톤으로 기록되는 단계 (상태 -> 마일스톤 phase)
PROPOSAL_PHASE = "proposal"
MILESTONE_PHASE_BY_STATUS = {
    SUPERVISOR_REVIEW: PROPOSAL_PHASE,
    MID_DEFENSE: MID_DEFENSE,
    FINAL_SUBMISSION: FINAL_SUBMISSION,
}
COMMENT_PHASES = (PROPOSAL_PHASE, SUPERVISOR_REVIEW, MID_DEFENSE, FINAL_SUBMISSION)


@dataclass(frozen=True)
class Transition:
    source: str
    action: str
    target: str


TRANSITIONS: Tuple[Transition, ...] = (
    Transition(DRAFT, ADVANCE, PENDING_PROPOSAL),
    Transition(PENDING_PROPOSAL, ADVANCE, SUPERVISOR_REVIEW),
    Transition(SUPERVISOR_REVIEW, APPROVE, APPROVED),
    Transition(SUPERVISOR_REVIEW, REQUEST_CHANGES, CHANGES_REQUESTED),
    # reject 는 request_changes 와 같은 상태로 간다. 구분은 마일스톤 피드백에만 남는다.
    Transition(SUPERVISOR_REVIEW, REJECT, CHANGES_REQUESTED),
    Transition(CHANGES_REQUESTED, ADVANCE, PENDING_PROPOSAL),
    Transition(APPROVED, ADVANCE, MID_DEFENSE),
    Transition(MID_DEFENSE, ADVANCE, FINAL_SUBMISSION),
    Transition(FINAL_SUBMISSION, ADVANCE, COMPLETED),
    Transition(COMPLETED, ADVANCE, ARCHIVED),
)


def build_transition_table(transitions: Iterable[Transition]) -> Dict[Tuple[str, str], str]:
    table: Dict[Tuple[str, str], str] = {}
    for transition in transitions:
        for state in (transition.source, transition.target):
            if state not in ALL_STATUSES:
                raise ValueError(f"unknown workflow status: {state}")
        key = (transition.source, transition.action)
        if key in table:
            raise ValueError(f"duplicate workflow transition: {transition.source} --{transition.action}-->")
        table[key] = transition.target

    reachable = {INITIAL_STATUS}
    frontier = [INITIAL_STATUS]
    while frontier:
        state = frontier.pop()
        for (source, _), target in table.items():
            if source == state and target not in reachable:
                reachable.add(target)
                frontier.append(target)
    unreachable = set(ALL_STATUSES) - reachable
    if unreachable:
        raise ValueError(f"unreachable workflow status: {', '.join(sorted(unreachable))}")
    return table


TRANSITION_TABLE = build_transition_table(TRANSITIONS)


def next_status(current: str, action: str) -> Optional[str]:
    return TRANSITION_TABLE.get((current, action))


def valid_transitions(current: str) -> FrozenSet[str]:
    return frozenset(target for (source, _), target in TRANSITION_TABLE.items() if source == current)


def can_transition(current: str, target: str) -> bool:
    return target in valid_transitions(current)


def actions_from(current: str) -> FrozenSet[str]:
    return frozenset(action for (source, action) in TRANSITION_TABLE if source == current)


def is_reviewable(current: str) -> bool:
    return REQUEST_CHANGES in actions_from(current)
