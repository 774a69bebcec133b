import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from llm.validation import validate_extraction
from models import Course, FairwayOutcome, HoleRecord, SubmissionType, TeeBox
from scorecard import (
    CourseResolution,
    FlagKind,
    InvalidShapeError,
    Scorecard,
    UnresolvedCourseError,
    apply_pars,
    calculate_gir,
    filter_courses,
    filter_tee_boxes,
    resolve_pars,
    review,
    summarize,
)


def _tee_box(tee_id="tee-1", course_id="course-1", name="Blue") -> TeeBox:
    return TeeBox(
        id=tee_id,
        course_id=course_id,
        name=name,
        front_nine_par=[4, 4, 3, 5, 4, 4, 3, 4, 5],
        back_nine_par=[4, 3, 4, 5, 4, 4, 3, 4, 5],
    )


def _payload(**overrides) -> dict:
    data = {
        "front_nine_scores": [4, 5, 3, 6, 4, 5, 3, 4, 5],
        "back_nine_scores": [5, 3, 4, 6, 4, 4, 3, 5, 5],
        "front_nine_putts": [2, 2, 1, 2, 2, 3, 2, 2, 2],
        "back_nine_putts": [2, 2, 2, 2, 1, 2, 2, 2, 2],
        "front_nine_fairways": [True, False, False, True, True, False, False, True, True],
        "back_nine_fairways": ["hit", "left", "right", "middle", "", None, "center", "rough", "hit"],
        "front_nine_gir": [True] * 9,
        "back_nine_gir": [True] * 9,
        "total_score": 78,
        "total_putts": 35,
        "total_fairways_hit": 9,
        "total_gir": 18,
        "course_id": "",
        "tee_box_id": "",
        "date_played": "",
        "submission_type": "scanned",
    }
    data.update(overrides)
    return data


# ================================================================
# GIR rule
# ================================================================

@pytest.mark.parametrize("score,putts,expected", [
    (4, 2, True),
    (3, 1, True),
    (6, 1, False),
    (5, 2, False),
    (2, 0, True),
    (None, 2, None),
    (4, None, None),
])
def test_calculate_gir(score, putts, expected):
    assert calculate_gir(score, putts) is expected


def test_gir_is_deterministic():
    assert calculate_gir(5, 3) == calculate_gir(5, 3)


# ================================================================
# Aggregator
# ================================================================

def test_summarize_totals():
    card = Scorecard.empty()
    card.set_score(0, 4)
    card.set_putts(0, 2)
    card.set_fairway(0, "hit")
    card.set_score(10, 7)
    card.set_fairway(10, "left")

    summary = summarize(card.holes)
    assert summary.total_score == 11
    assert summary.total_putts == 2
    assert summary.fairways_hit == 1
    assert summary.gir_count == 1
    assert summary.front_nine_score == 4
    assert summary.back_nine_score == 7
    assert summary.gir_percentage == pytest.approx(100 / 18)
    assert summary.putts_per_hole == pytest.approx(2 / 18)


def test_summarize_requires_eighteen_holes():
    with pytest.raises(ValueError):
        summarize([HoleRecord(hole_number=i) for i in range(1, 10)])


def test_manual_entry_scenario():
    card = Scorecard.empty()
    card.set_score(0, 4)
    card.set_putts(0, 2)
    assert card.gir(0) is True

    card.set_score(1, 6)
    card.set_putts(1, 1)
    assert card.gir(1) is False
    assert card.gir(2) is None

    summary = card.summary()
    assert summary.total_score == 10
    assert summary.total_putts == 3
    assert summary.gir_count == 1
    assert summary.fairways_hit == 0


# ================================================================
# Single-field setters and quick fill
# ================================================================

def test_setters_touch_only_one_field():
    card = Scorecard.empty()
    card.set_score(4, 5)
    hole = card.hole(4)
    assert hole.score == 5
    assert hole.putts is None
    assert hole.fairway_outcome == FairwayOutcome.UNSET
    assert all(h.score is None for i, h in enumerate(card.holes) if i != 4)


def test_set_field_reports_invalid_values():
    card = Scorecard.empty()
    assert card.set_field(0, "putts", 2) is None
    assert card.set_field(0, "score", 0) is not None
    assert card.set_field(0, "par", 3) == "par is not editable"
    assert card.set_field(0, "fairway", "right") is None
    assert card.hole(0).fairway_outcome == FairwayOutcome.RIGHT


def test_clear_field():
    card = Scorecard.empty()
    card.set_score(0, 5)
    card.set_fairway(0, "hit")
    card.clear_field(0, "score")
    card.clear_field(0, "fairway_outcome")
    assert card.hole(0).score is None
    assert card.hole(0).fairway_outcome == FairwayOutcome.UNSET


def test_hole_index_out_of_range():
    card = Scorecard.empty()
    with pytest.raises(IndexError):
        card.set_score(18, 4)


def test_cycle_fairway():
    card = Scorecard.empty()
    seen = [card.cycle_fairway(0) for _ in range(4)]
    assert seen == [
        FairwayOutcome.HIT,
        FairwayOutcome.LEFT,
        FairwayOutcome.RIGHT,
        FairwayOutcome.UNSET,
    ]


def test_quick_fill_putts_scenario():
    card = Scorecard.empty()
    card.set_all_putts(2)
    assert all(h.putts == 2 for h in card.holes)
    assert all(h.score is None for h in card.holes)
    summary = card.summary()
    assert summary.total_putts == 36
    assert summary.total_score == 0
    assert summary.gir_count == 0


def test_quick_fill_scores_ignores_par():
    card = Scorecard.empty(_tee_box())
    card.set_all_scores()
    assert all(h.score == 5 for h in card.holes)
    assert card.summary().total_score == 90


def test_holes_returns_copies():
    card = Scorecard.empty()
    card.holes[0].score = 9
    assert card.hole(0).score is None


# ================================================================
# Par resolver
# ================================================================

def test_resolve_pars_defaults_to_four():
    assert resolve_pars(None) == [4] * 18
    assert resolve_pars(_tee_box())[2] == 3


def test_apply_tee_box_is_idempotent_and_keeps_entries():
    card = Scorecard.empty()
    card.set_score(2, 4)
    card.set_putts(2, 2)
    card.set_fairway(2, "left")
    before = [(h.score, h.putts, h.fairway_outcome) for h in card.holes]

    tee = _tee_box()
    card.apply_tee_box(tee)
    first = card.pars
    card.apply_tee_box(tee)
    assert card.pars == first == tee.pars
    assert [(h.score, h.putts, h.fairway_outcome) for h in card.holes] == before
    assert card.hole(2).score_label() == "Bogey"


def test_apply_pars_length_mismatch():
    with pytest.raises(ValueError):
        apply_pars([HoleRecord(hole_number=1)], None)


# ================================================================
# Reconciliation
# ================================================================

def test_reconciling_canonical_holes_is_identity():
    card = Scorecard.empty(_tee_box())
    card.set_score(0, 4)
    card.set_putts(0, 2)
    card.set_fairway(5, "right")
    card.set_putts(7, 0)

    again = Scorecard.from_hole_records(card.holes)
    assert again.holes == card.holes
    assert Scorecard.from_hole_records(again.holes).holes == card.holes


def test_from_hole_records_requires_ordered_eighteen():
    holes = Scorecard.empty().holes
    with pytest.raises(ValueError):
        Scorecard.from_hole_records(holes[:17])
    with pytest.raises(ValueError):
        Scorecard.from_hole_records(list(reversed(holes)))


def test_from_extraction_maps_positions_and_fairways():
    payload = validate_extraction(_payload())
    card = Scorecard.from_extraction(payload, _tee_box())
    holes = card.holes

    assert holes[0].score == 4
    assert holes[9].score == 5
    assert holes[17].putts == 2
    assert holes[2].par == 3
    assert holes[0].fairway_outcome == FairwayOutcome.HIT
    assert holes[1].fairway_outcome == FairwayOutcome.UNSET
    assert [h.fairway_outcome for h in holes[9:]] == [
        FairwayOutcome.HIT,
        FairwayOutcome.LEFT,
        FairwayOutcome.RIGHT,
        FairwayOutcome.HIT,
        FairwayOutcome.UNSET,
        FairwayOutcome.UNSET,
        FairwayOutcome.HIT,
        FairwayOutcome.UNSET,
        FairwayOutcome.HIT,
    ]


def test_from_extraction_discards_unusable_values():
    payload = validate_extraction(_payload(
        front_nine_scores=[None, 0, -1, 4.5, "5", 4.0, True, 3, 4],
        front_nine_putts=[2, -1, None, 2, "x", 2, 2, 2.0, 0],
    ))
    holes = Scorecard.from_extraction(payload).holes
    assert [h.score for h in holes[:9]] == [None, None, None, None, 5, 4, None, 3, 4]
    assert [h.putts for h in holes[:9]] == [2, None, None, 2, None, 2, 2, 2, 0]


def test_totals_are_derived_locally_not_from_service():
    payload = validate_extraction(_payload(total_score=999, total_gir=18))
    card = Scorecard.from_extraction(payload)
    summary = card.summary()
    assert summary.total_score == 78
    assert summary.gir_count == 10
    assert card.extraction.total_score == 999
    assert card.extraction.total_gir == 18


def test_extraction_rejection_never_reaches_reconciler(monkeypatch):
    called = MagicMock()
    monkeypatch.setattr(Scorecard, "from_extraction", called)
    with pytest.raises(InvalidShapeError):
        payload = validate_extraction(_payload(back_nine_scores=[4] * 8))
        Scorecard.from_extraction(payload)
    called.assert_not_called()


def test_to_round_requires_resolution():
    card = Scorecard.empty()
    card.set_score(0, 4)
    with pytest.raises(UnresolvedCourseError):
        card.to_round("user-1", CourseResolution(course_id="course-1"))


def test_to_round_stores_unset_as_zero():
    card = Scorecard.empty()
    card.set_score(0, 4)
    card.set_putts(0, 2)
    card.set_fairway(0, "hit")
    card.set_putts(1, 1)
    resolution = CourseResolution(course_id="course-1", tee_box_id="tee-1", date_played="2024-05-04")

    round_ = card.to_round("user-1", resolution, SubmissionType.SCANNED)
    assert round_.front_nine_scores[:3] == [4, 0, 0]
    assert round_.front_nine_putts[:3] == [2, 1, 0]
    assert round_.front_nine_gir[:2] == [True, False]
    assert round_.total_score == 4
    assert round_.total_putts == 3
    assert round_.total_fairways_hit == 1
    assert round_.total_gir == 1
    assert round_.date_played == date(2024, 5, 4)
    assert round_.submission_type == SubmissionType.SCANNED


# ================================================================
# Course / tee-box resolution
# ================================================================

def _courses():
    return [
        Course(id="c1", name="Pebble Creek"),
        Course(id="c2", name="Pine Valley"),
        Course(id="c3", name="Creekside Links"),
    ]


def test_filter_courses_and_tee_boxes():
    assert [c.id for c in filter_courses(_courses(), "CREEK")] == ["c1", "c3"]
    assert len(filter_courses(_courses(), "  ")) == 3
    tees = [_tee_box("t1", name="Blue"), _tee_box("t2", name="Blue Senior"), _tee_box("t3", name="Red")]
    assert [t.id for t in filter_tee_boxes(tees, "blue")] == ["t1", "t2"]


def test_resolution_defaults_date_to_today():
    resolution = CourseResolution(date_played="", today=date(2024, 7, 4))
    assert resolution.date_played == date(2024, 7, 4)
    assert resolution.missing_fields() == ["course", "tee box"]


def test_select_course_clears_tee_box():
    resolution = CourseResolution()
    resolution.select_course(Course(id="course-1", name="Pebble Creek"))
    resolution.select_tee_box(_tee_box())
    assert resolution.is_resolved

    resolution.select_course(Course(id="course-2", name="Pine Valley"))
    assert resolution.tee_box_id == ""
    assert resolution.tee_box is None
    assert not resolution.is_resolved


def test_select_tee_box_of_other_course_rejected():
    resolution = CourseResolution()
    resolution.select_course(Course(id="course-2", name="Pine Valley"))
    with pytest.raises(ValueError):
        resolution.select_tee_box(_tee_box(course_id="course-1"))


def test_match_course_by_name_needs_single_match():
    resolution = CourseResolution(course_name="creek")
    assert resolution.match_course_by_name(_courses()) is None

    resolution = CourseResolution(course_name="pine valley")
    assert resolution.match_course_by_name(_courses()).id == "c2"
    assert resolution.course_id == "c2"


@pytest.mark.asyncio
async def test_verify_clears_unknown_ids_and_matches_names():
    store = MagicMock()
    store.get_course = AsyncMock(return_value=None)
    store.list_courses = AsyncMock(return_value=_courses())
    store.get_tee_box = AsyncMock(return_value=None)
    store.list_tee_boxes = AsyncMock(return_value=[])

    resolution = CourseResolution(course_id="bogus", tee_box_id="bogus-tee")
    await resolution.verify(store)
    assert resolution.course_id == ""
    assert resolution.tee_box_id == ""

    tee = _tee_box(course_id="c2")
    store.list_tee_boxes = AsyncMock(return_value=[tee])
    resolution = CourseResolution(course_name="Pine Valley", tee_box_name="blue")
    await resolution.verify(store)
    assert resolution.course_id == "c2"
    assert resolution.tee_box is tee
    assert resolution.is_resolved



@pytest.mark.asyncio
async def test_verify_tee_box_without_course_brings_its_course():
    course = Course(id="c1", name="Pebble Creek")
    tee = _tee_box(tee_id="t1", course_id="c1")
    store = MagicMock()
    store.get_tee_box = AsyncMock(return_value=tee)
    store.get_course = AsyncMock(return_value=course)
    store.list_courses = AsyncMock(return_value=[])

    resolution = CourseResolution(tee_box_id="t1", course_name="Somewhere Else")
    await resolution.verify(store)
    assert resolution.course_id == "c1"
    assert resolution.course_name == "Pebble Creek"
    assert resolution.tee_box_id == "t1"
    assert resolution.tee_box is tee
    assert resolution.is_resolved
    store.get_course.assert_awaited_once_with("c1")
    store.list_courses.assert_not_called()


@pytest.mark.asyncio
async def test_verify_unknown_tee_box_without_course_is_cleared():
    store = MagicMock()
    store.get_tee_box = AsyncMock(return_value=None)
    store.list_courses = AsyncMock(return_value=[])

    resolution = CourseResolution(tee_box_id="t-missing")
    await resolution.verify(store)
    assert resolution.tee_box_id == ""
    assert resolution.missing_fields() == ["course", "tee box"]

# ================================================================
# Review flags
# ================================================================

def test_review_flags_implausible_values():
    card = Scorecard.empty()
    card.set_score(0, 16)
    card.set_putts(1, 7)
    card.set_score(2, 2)
    card.set_putts(2, 3)
    kinds = {(f.kind, f.hole_number) for f in review(card)}
    assert (FlagKind.HIGH_SCORE, 1) in kinds
    assert (FlagKind.HIGH_PUTTS, 2) in kinds
    assert (FlagKind.PUTTS_EXCEED_SCORE, 3) in kinds


def test_review_flags_service_disagreement():
    payload = validate_extraction(_payload(
        front_nine_gir=[False] + [True] * 8,
        total_score=80,
    ))
    card = Scorecard.from_extraction(payload)
    flags = review(card)
    gir_flags = [f for f in flags if f.kind == FlagKind.GIR_MISMATCH]
    assert any(f.hole_number == 1 for f in gir_flags)
    assert any(f.kind == FlagKind.TOTAL_MISMATCH and f.field == "total_score" for f in flags)


def test_manual_scorecard_has_no_extraction_flags():
    card = Scorecard.empty()
    card.set_score(0, 4)
    assert review(card) == []


def test_set_date_falls_back_to_today():
    resolution = CourseResolution(course_id="course-1", tee_box_id="tee-1", date_played="2024-06-01")
    resolution.set_date("2023-09-14")
    assert resolution.date_played == date(2023, 9, 14)
    resolution.set_date("not a date")
    assert resolution.date_played == date.today()


@pytest.mark.asyncio
async def test_null_collaborators_wire_without_backend():
    from scorecard.collaborators import NullCourseStore, NullInsightService, NullRoundStore

    resolution = CourseResolution(course_id="course-1", tee_box_id="tee-1", course_name="Pebble")
    await resolution.verify(NullCourseStore())
    assert resolution.missing_fields() == ["course", "tee box"]

    rounds = NullRoundStore()
    assert await rounds.get_rounds_for_user("user-1") == []
    assert await rounds.delete_round("r1", "user-1") is False

    insights = NullInsightService()
    assert await insights.analyze([]) == ""
    assert await insights.answer("How is my putting?", []) == ""
