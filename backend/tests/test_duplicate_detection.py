"""초록 유사도 계산과 중복 판정 규칙을 검증하는 단위 테스트입니다."""

from types import SimpleNamespace

from thesisflow.utils.duplicate_detection import calculate_similarity, check_duplicate, tokenize


def _entry(project_id, abstract, title=None, year=2025):
    return SimpleNamespace(project_id=project_id, abstract=abstract, title=title or f"p{project_id}", year=year)


def test_tokenize_drops_short_tokens_and_punctuation():
    assert tokenize("An AI-based tool, for ML!") == {"based", "tool", "for"}


def test_identical_texts_are_fully_similar():
    text = "Graph neural networks for traffic forecasting"
    assert calculate_similarity(text, text) == 100.0


def test_partial_overlap_is_jaccard_percentage():
    # {alpha, beta, gamma} vs {alpha, beta, delta}: 2 / 4
    assert calculate_similarity("alpha beta gamma", "alpha beta delta") == 50.0


def test_similarity_is_zero_when_no_tokens_survive():
    assert calculate_similarity("a b c", "to be") == 0.0
    assert calculate_similarity("", None) == 0.0


def test_similarity_is_symmetric():
    a = "Deep learning for medical image segmentation"
    b = "Medical image analysis with classical methods"
    assert calculate_similarity(a, b) == calculate_similarity(b, a)


def test_check_duplicate_collects_matches_above_threshold():
    corpus = [
        _entry(1, "alpha beta gamma"),
        _entry(2, "alpha beta gamma delta"),
        _entry(3, "unrelated words entirely"),
        _entry(4, ""),
    ]
    result = check_duplicate("alpha beta gamma", corpus, threshold=60)
    assert result["is_duplicate"] is True
    assert [m["project_id"] for m in result["matches"]] == [1, 2]
    assert result["matches"][0]["similarity"] == 100.0
    assert result["matches"][1]["similarity"] == 75.0
    assert result["highest_match"] == 100.0


def test_highest_match_is_reported_below_threshold():
    corpus = [_entry(1, "alpha beta gamma delta")]
    result = check_duplicate("alpha omega", corpus, threshold=60)
    assert result["is_duplicate"] is False
    assert result["matches"] == []
    # {alpha, omega} vs {alpha, beta, gamma, delta}: 1 / 5
    assert result["highest_match"] == 20.0


def test_similarity_is_rounded_to_two_decimals():
    corpus = [_entry(1, "alpha beta gamma")]
    result = check_duplicate("alpha beta", corpus, threshold=0)
    assert result["matches"][0]["similarity"] == 66.67


def test_similarity_exactly_at_threshold_is_flagged():
    shared = [f"shared{i:03d}" for i in range(60)]
    first = " ".join(shared + [f"first{i:03d}" for i in range(20)])
    second = " ".join(shared + [f"second{i:03d}" for i in range(20)])

    assert calculate_similarity(first, second) == 60.0
    result = check_duplicate(first, [_entry(1, second)], threshold=60)
    assert result["is_duplicate"] is True
    assert result["matches"][0]["similarity"] == 60.0
    assert result["highest_match"] == 60.0

    stricter = check_duplicate(first, [_entry(1, second)], threshold=60.01)
    assert stricter["is_duplicate"] is False
    assert stricter["highest_match"] == 60.0
