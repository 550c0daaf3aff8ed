from boqtrack.core.lookahead.matcher import (
    activity_names_equal,
    activity_names_match,
    kpi_matches_activity,
    project_codes_match,
)
from boqtrack.core.lookahead.schemas import Activity, ProgressRecord


def test_sub_code_requires_exact_full_code_even_if_bare_codes_differ():
    activity = Activity(project_code="P1", project_sub_code="A", activity_name="Piling")
    record = ProgressRecord(project_code="LEGACY-1", project_full_code="P1-A", activity_name="Piling")

    assert activity.full_code == "P1-A"
    assert kpi_matches_activity(record, activity)


def test_sub_code_has_no_fallback_to_bare_project_code():
    activity = Activity(project_code="P1", project_sub_code="A", activity_name="Piling")
    record = ProgressRecord(project_code="P1", activity_name="Piling")

    assert not kpi_matches_activity(record, activity)


def test_sub_code_does_not_bleed_across_sub_projects():
    activity = Activity(project_full_code="P1-A", activity_name="Piling")
    record = ProgressRecord(project_code="P1", project_sub_code="B", activity_name="Piling")

    assert not kpi_matches_activity(record, activity)


def test_codes_are_compared_trimmed_and_case_insensitive():
    activity = Activity(project_code="P200", activity_name="Piling")
    record = ProgressRecord(project_full_code=" p200 ", activity_name="Piling")

    assert kpi_matches_activity(record, activity)


def test_no_sub_code_fallback_is_symmetric():
    pairs = [
        (ProgressRecord(project_code="P2"), Activity(project_full_code="P2")),
        (ProgressRecord(project_full_code="P2"), Activity(project_code="P2")),
        (ProgressRecord(project_code="P2"), Activity(project_code="P3")),
    ]
    for record, activity in pairs:
        assert project_codes_match(record, activity) == project_codes_match(activity, record)


def test_sub_code_rule_is_not_symmetric():
    record = ProgressRecord(project_code="P1", project_full_code="P1-A")
    activity = Activity(project_code="P1")

    assert project_codes_match(record, activity)
    assert not project_codes_match(activity, record)


def test_empty_codes_never_match():
    assert not project_codes_match(ProgressRecord(), Activity())


def test_name_match_accepts_containment_both_ways():
    assert activity_names_match("Excavation", "excavation")
    assert activity_names_match("Excavation works - zone 3", "Excavation")
    assert activity_names_match("Concrete", "Blinding Concrete")
    assert not activity_names_match("Concrete", "Excavation")
    assert not activity_names_match("", "Excavation")
    assert not activity_names_match("Excavation", "  ")


def test_strict_name_matcher_can_be_swapped_in():
    activity = Activity(project_code="P1", activity_name="Excavation")
    record = ProgressRecord(project_code="P1", activity_name="Excavation works")

    assert kpi_matches_activity(record, activity)
    assert not kpi_matches_activity(record, activity, name_matcher=activity_names_equal)


def test_zone_is_not_compared():
    activity = Activity(project_code="P1", activity_name="Excavation", zone_number="1")
    record = ProgressRecord(project_code="P1", activity_name="Excavation", zone="7")

    assert kpi_matches_activity(record, activity)
