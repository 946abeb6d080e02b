"""워크플로 전이 테이블 정의와 검증 규칙을 확인하는 단위 테스트입니다."""

import pytest

from thesisflow.utils import workflow_states as wf
from thesisflow.utils.errors import InvalidTransition


def test_successors_of_each_state():
    assert wf.valid_transitions("draft") == {"pending_proposal"}
    assert wf.valid_transitions("supervisor_review") == {"approved", "changes_requested"}
    assert wf.valid_transitions("changes_requested") == {"pending_proposal"}
    assert wf.valid_transitions("final_submission") == {"completed"}
    assert wf.valid_transitions("archived") == frozenset()


def test_can_transition():
    assert wf.can_transition("approved", "mid_defense")
    assert not wf.can_transition("approved", "completed")
    assert not wf.can_transition("draft", "draft")


def test_reject_and_request_changes_share_target():
    assert wf.next_status("supervisor_review", "reject") == "changes_requested"
    assert wf.next_status("supervisor_review", "request_changes") == "changes_requested"
    assert wf.next_status("supervisor_review", "approve") == "approved"
    assert wf.next_status("approved", "approve") is None


def test_only_supervisor_review_is_reviewable():
    reviewable = [status for status in wf.ALL_STATUSES if wf.is_reviewable(status)]
    assert reviewable == ["supervisor_review"]


def test_every_status_is_reachable_from_draft():
    table = wf.build_transition_table(wf.TRANSITIONS)
    assert table == wf.TRANSITION_TABLE


def test_duplicate_edge_is_rejected():
    transitions = wf.TRANSITIONS + (wf.Transition("draft", "advance", "archived"),)
    with pytest.raises(ValueError, match="duplicate"):
        wf.build_transition_table(transitions)


def test_unreachable_status_is_rejected():
    transitions = tuple(t for t in wf.TRANSITIONS if t.target != "archived")
    with pytest.raises(ValueError, match="archived"):
        wf.build_transition_table(transitions)


def test_unknown_status_is_rejected():
    transitions = wf.TRANSITIONS + (wf.Transition("archived", "advance", "deleted"),)
    with pytest.raises(ValueError, match="unknown"):
        wf.build_transition_table(transitions)


def test_invalid_transition_detail_lists_successors():
    exc = InvalidTransition("approved", "completed", wf.valid_transitions("approved"))
    assert exc.status_code == 400
    assert exc.detail["current_status"] == "approved"
    assert exc.detail["valid_transitions"] == ["mid_defense"]
    assert "approved" in exc.detail["message"]
