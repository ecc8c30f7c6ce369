"""Tests for the ranking engine and the competition rank walk."""

import asyncio

import pytest

from schoolboard.errors import InvalidScopeError, RankingError
from schoolboard.services.ranking import RankingEngine, assign_competition_ranks
from tests.helpers.fakes import InMemoryResultStore, InMemoryStudentDirectory, make_result

SUBJECT_SCOPE = ("school_1", "class_1", "section_a", "math")
SECTION_SCOPE = ("school_1", "class_1", "section_a")


def build_engine(records, students=None):
    store = InMemoryResultStore(records)
    directory = InMemoryStudentDirectory(students)
    return RankingEngine(store, directory), store, directory


def ranks_by_id(store):
    return {r["result_id"]: r.get("rank_in_class") for r in store.records}


# ============================================================================
# RANK WALK
# ============================================================================


@pytest.mark.parametrize(
    "values, expected",
    [
        ([100, 90, 80], [1, 2, 3]),
        ([90, 90, 80, 70], [1, 1, 3, 4]),
        ([50, 50, 50], [1, 1, 1]),
        ([95, 80, 80, 80, 60, 60, 10], [1, 2, 2, 2, 5, 5, 7]),
        ([], []),
    ],
)
def test_assign_competition_ranks(values, expected):
    assert assign_competition_ranks(values) == expected


def test_assign_competition_ranks_rejects_ascending_input():
    with pytest.raises(ValueError):
        assign_competition_ranks([70, 80])


# ============================================================================
# PER-SUBJECT RANKING
# ============================================================================


async def test_ranks_without_ties():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 80),
        make_result("r2", "s2", 100),
        make_result("r3", "s3", 90),
    ])

    await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)

    assert ranks_by_id(store) == {"r1": 3, "r2": 1, "r3": 2}


async def test_tied_scores_share_rank_and_skip_next():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 90),
        make_result("r2", "s2", 90),
        make_result("r3", "s3", 80),
        make_result("r4", "s4", 70),
    ])

    await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)

    assert ranks_by_id(store) == {"r1": 1, "r2": 1, "r3": 3, "r4": 4}


async def test_all_tied_scores_rank_first():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 50),
        make_result("r2", "s2", 50),
        make_result("r3", "s3", 50),
    ])

    await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)

    assert ranks_by_id(store) == {"r1": 1, "r2": 1, "r3": 1}


async def test_class_and_section_rank_are_identical_and_updated_at_refreshed():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 40),
        make_result("r2", "s2", 60),
    ])

    await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)

    for record in store.records:
        assert record["rank_in_class"] == record["rank_in_section"]
        assert "updated_at" in record


async def test_ranking_is_idempotent():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 90),
        make_result("r2", "s2", 90),
        make_result("r3", "s3", 75),
    ])

    await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)
    first = ranks_by_id(store)
    await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)

    assert ranks_by_id(store) == first


async def test_ranking_only_touches_its_own_scope():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 90),
        make_result("r2", "s2", 80),
        make_result("other_subject", "s1", 99, subject_id="science"),
        make_result("other_section", "s9", 99, section_id="section_b"),
        make_result("other_school", "s8", 99, school_id="school_2"),
    ])

    await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)

    assert store.reads == [{
        "school_id": "school_1",
        "class_id": "class_1",
        "section_id": "section_a",
        "subject_id": "math",
    }]
    assert sorted(store.writes) == ["r1", "r2"]
    assert "rank_in_class" not in store.by_id("other_subject")
    assert "rank_in_class" not in store.by_id("other_section")
    assert "rank_in_class" not in store.by_id("other_school")


async def test_empty_scope_ranks_nothing():
    engine, store, _ = build_engine([])

    await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)

    assert store.writes == []


@pytest.mark.parametrize("missing", ["school_id", "class_id", "section_id", "subject_id"])
async def test_missing_scope_is_rejected_before_store_access(missing):
    engine, store, _ = build_engine([make_result("r1", "s1", 90)])
    scope = dict(zip(["school_id", "class_id", "section_id", "subject_id"], SUBJECT_SCOPE))
    scope[missing] = "  " if missing == "class_id" else None

    with pytest.raises(InvalidScopeError) as exc_info:
        await engine.compute_and_assign_ranks(**scope)

    assert missing in str(exc_info.value)
    assert store.reads == []


async def test_read_failure_raises_ranking_error():
    engine, store, _ = build_engine([make_result("r1", "s1", 90)])
    store.fail_reads = True

    with pytest.raises(RankingError, match="Failed to calculate and assign ranks."):
        await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)


async def test_write_failure_keeps_earlier_writes():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 90),
        make_result("r2", "s2", 80),
        make_result("r3", "s3", 70),
    ])
    store.fail_write_after = 1

    with pytest.raises(RankingError):
        await engine.compute_and_assign_ranks(*SUBJECT_SCOPE)

    assert store.by_id("r1")["rank_in_class"] == 1
    assert "rank_in_class" not in store.by_id("r2")
    assert "rank_in_class" not in store.by_id("r3")


async def test_concurrent_ranking_of_same_scope_is_serialized():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 90),
        make_result("r2", "s2", 80),
    ])
    store.read_delay = 0.01

    await asyncio.gather(
        engine.compute_and_assign_ranks(*SUBJECT_SCOPE),
        engine.compute_and_assign_ranks(*SUBJECT_SCOPE),
    )

    assert store.max_active == 1
    assert ranks_by_id(store) == {"r1": 1, "r2": 2}


# ============================================================================
# SUBJECT LEADERBOARD
# ============================================================================


async def test_top_students_by_subject_truncates_to_top_n():
    records = [make_result(f"r{i}", f"s{i:02d}", 50 + i) for i in range(15)]
    engine, _, _ = build_engine(records)

    top = await engine.get_top_students_by_subject(*SUBJECT_SCOPE, top_n=10)

    assert len(top) == 10
    scores = [r["score"] for r in top]
    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 64


async def test_top_students_by_subject_defaults_to_ten():
    records = [make_result(f"r{i}", f"s{i:02d}", i) for i in range(12)]
    engine, _, _ = build_engine(records)

    top = await engine.get_top_students_by_subject(*SUBJECT_SCOPE)

    assert len(top) == 10


async def test_top_students_by_subject_does_not_recompute_ranks():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 90, rank_in_class=7, rank_in_section=7),
    ])

    top = await engine.get_top_students_by_subject(*SUBJECT_SCOPE)

    assert top[0]["rank_in_class"] == 7
    assert store.writes == []


async def test_top_students_by_subject_cuts_ties_at_limit():
    engine, _, _ = build_engine([
        make_result("r1", "s1", 90),
        make_result("r2", "s2", 80),
        make_result("r3", "s3", 80),
    ])

    top = await engine.get_top_students_by_subject(*SUBJECT_SCOPE, top_n=2)

    assert [r["student_id"] for r in top] == ["s1", "s2"]


async def test_top_students_by_subject_empty_scope():
    engine, _, _ = build_engine([make_result("r1", "s1", 90, subject_id="science")])

    assert await engine.get_top_students_by_subject(*SUBJECT_SCOPE) == []


@pytest.mark.parametrize("top_n", [0, -3])
async def test_top_students_by_subject_rejects_non_positive_top_n(top_n):
    engine, store, _ = build_engine([])

    with pytest.raises(InvalidScopeError):
        await engine.get_top_students_by_subject(*SUBJECT_SCOPE, top_n=top_n)
    assert store.reads == []


# ============================================================================
# OVERALL LEADERBOARD
# ============================================================================


async def test_overall_average_is_sum_of_scores_over_sum_of_max():
    engine, _, _ = build_engine(
        [
            make_result("r1", "s1", 80, subject_id="math"),
            make_result("r2", "s1", 60, subject_id="science"),
        ],
        students={"s1": {"first_name": "Asha", "last_name": "Rao", "roll_number": "12"}},
    )

    top = await engine.get_overall_top_students(*SECTION_SCOPE)

    assert len(top) == 1
    entry = top[0]
    assert entry.average_percentage == pytest.approx(70.0)
    assert entry.total_score == 140
    assert entry.total_max_marks == 200
    assert entry.subject_count == 2
    assert entry.rank == 1
    assert (entry.first_name, entry.last_name, entry.roll_number) == ("Asha", "Rao", "12")
    assert {r["result_id"] for r in entry.subject_results} == {"r1", "r2"}


async def test_overall_uses_marks_ratio_not_mean_of_percentages():
    # 10/10 and 0/90: mean of percentages would be 50, ratio is 10
    engine, _, _ = build_engine([
        make_result("r1", "s1", 10, max_marks=10, subject_id="math"),
        make_result("r2", "s1", 0, max_marks=90, subject_id="science"),
    ])

    top = await engine.get_overall_top_students(*SECTION_SCOPE)

    assert top[0].average_percentage == pytest.approx(10.0)


async def test_overall_ranks_ties_and_orders_descending():
    engine, _, _ = build_engine([
        make_result("r1", "s1", 70, subject_id="math"),
        make_result("r2", "s2", 90, subject_id="math"),
        make_result("r3", "s3", 90, subject_id="math"),
        make_result("r4", "s4", 50, subject_id="math"),
    ])

    top = await engine.get_overall_top_students(*SECTION_SCOPE)

    assert [(e.student_id, e.rank) for e in top] == [("s2", 1), ("s3", 1), ("s1", 3), ("s4", 4)]


async def test_overall_truncates_after_ranking():
    records = [make_result(f"r{i}", f"s{i:02d}", 40 + i) for i in range(15)]
    engine, _, _ = build_engine(records)

    top = await engine.get_overall_top_students(*SECTION_SCOPE, top_n=10)

    assert len(top) == 10
    assert [e.rank for e in top] == list(range(1, 11))


async def test_overall_spans_all_subjects_but_only_the_section():
    engine, store, _ = build_engine([
        make_result("r1", "s1", 80, subject_id="math"),
        make_result("r2", "s1", 90, subject_id="art"),
        make_result("r3", "s2", 100, section_id="section_b"),
    ])

    top = await engine.get_overall_top_students(*SECTION_SCOPE)

    assert store.reads == [{"school_id": "school_1", "class_id": "class_1", "section_id": "section_a"}]
    assert [e.student_id for e in top] == ["s1"]
    assert top[0].subject_count == 2


async def test_overall_counts_duplicate_records():
    engine, _, _ = build_engine([
        make_result("r1", "s1", 80, subject_id="math"),
        make_result("r2", "s1", 80, subject_id="math"),
    ])

    top = await engine.get_overall_top_students(*SECTION_SCOPE)

    assert top[0].subject_count == 2
    assert top[0].total_score == 160


async def test_overall_unknown_student_has_no_display_fields():
    engine, _, _ = build_engine([make_result("r1", "ghost", 75)])

    top = await engine.get_overall_top_students(*SECTION_SCOPE)

    assert top[0].first_name is None
    assert top[0].roll_number is None


async def test_overall_empty_scope_returns_empty_list():
    engine, _, _ = build_engine([])

    assert await engine.get_overall_top_students(*SECTION_SCOPE) == []


async def test_overall_directory_failure_raises_ranking_error():
    engine, _, directory = build_engine([make_result("r1", "s1", 75)])
    directory.fail = True

    with pytest.raises(RankingError, match="Failed to retrieve overall top students."):
        await engine.get_overall_top_students(*SECTION_SCOPE)


async def test_overall_missing_scope_rejected_before_store_access():
    engine, store, _ = build_engine([make_result("r1", "s1", 75)])

    with pytest.raises(InvalidScopeError):
        await engine.get_overall_top_students("school_1", "", "section_a")
    assert store.reads == []
