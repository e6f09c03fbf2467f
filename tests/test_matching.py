from internship_portal.services.matching_service import (
    calculate_match_score,
    rank_internships,
    round_half_up,
)


def test_partial_overlap_rounds_to_nearest():
    assert calculate_match_score({"Python", "SQL"}, ["Python", "SQL", "Go"]) == 67


def test_full_overlap_is_100():
    assert calculate_match_score(["Go", "Python"], ["Python", "Go"]) == 100


def test_no_candidate_skills_scores_zero():
    assert calculate_match_score(set(), ["Python"]) == 0
    assert calculate_match_score(None, ["Python"]) == 0


def test_no_required_skills_scores_zero():
    assert calculate_match_score(["Python"], []) == 0
    assert calculate_match_score(["Python"], None) == 0


def test_matching_is_case_sensitive():
    assert calculate_match_score(["python"], ["Python"]) == 0


def test_half_rounds_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(2.5) == 3
    # 1 of 8 -> 12.5%
    assert calculate_match_score(["A"], ["A", "B", "C", "D", "E", "F", "G", "H"]) == 13


def test_score_stays_in_range():
    required = ["A", "B", "C"]
    for skills in (["A"], ["A", "B"], ["A", "B", "C", "D"], ["Z"]):
        assert 0 <= calculate_match_score(skills, required) <= 100


def test_ranking_puts_higher_scores_first():
    catalog = [
        {"_id": "low", "required_skills": ["Python", "Go"]},
        {"_id": "high", "required_skills": ["Python"]},
        {"_id": "none", "required_skills": ["Rust"]},
    ]

    ranked = rank_internships(["Python"], catalog)

    assert [(i["_id"], score) for i, score in ranked] == [
        ("high", 100), ("low", 50), ("none", 0)
    ]


def test_ranking_without_skills_keeps_catalog_order():
    catalog = [{"_id": str(n), "required_skills": ["Python"]} for n in range(4)]

    ranked = rank_internships([], catalog)

    assert [i["_id"] for i, _ in ranked] == ["0", "1", "2", "3"]
    assert all(score == 0 for _, score in ranked)


def test_ranking_is_monotonic():
    catalog = [
        {"_id": str(n), "required_skills": required}
        for n, required in enumerate([["A"], ["A", "B"], ["B", "C", "D"], ["A", "B", "C"], []])
    ]

    scores = [score for _, score in rank_internships(["A", "B"], catalog)]

    assert scores == sorted(scores, reverse=True)
