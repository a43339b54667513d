"""
Tests for entity parsing, lookup maps and the shared calc helpers.
"""

from datetime import date

import pytest

from core.calc import parse_date, round2, working_days_between
from core.lookups import (
    build_client_map,
    build_person_map,
    build_project_map,
    build_role_map,
    build_skill_map,
    build_team_map,
    person_name,
    team_name,
)
from core.models import Assignment, Leave, Person, Project, Team


class TestFromApi:
    """camelCase API payloads → dataclasses."""

    def test_person_from_api(self):
        person = Person.from_api({
            "id": 7, "firstName": "Dana", "lastName": "Ng", "email": "dana@co.com",
            "teamIds": [3, 4], "isPlaceholder": True,
        })
        assert person.first_name == "Dana"
        assert person.team_id is None
        assert person.team_ids == [3, 4]
        assert person.primary_team_id == 3
        assert person.is_placeholder is True

    def test_person_all_team_ids_merges_both_fields(self):
        person = Person(id=1, team_id=5, team_ids=[6])
        assert person.all_team_ids == {5, 6}

    def test_project_from_api_defaults(self):
        project = Project.from_api({"id": 1, "name": "X"})
        assert project.is_confirmed is False
        assert project.is_archived is False
        assert project.pricing_model is None
        assert project.start_date is None

    def test_assignment_minutes_default_to_zero(self):
        a = Assignment.from_api({"personId": 1, "projectId": 2, "minutesPerDay": None})
        assert a.minutes_per_day == 0
        assert a.role_id is None

    def test_leave_label_fallbacks(self):
        assert Leave.from_api({"personId": 1, "leaveType": "PTO"}).label == "PTO"
        assert Leave.from_api({"personId": 1, "type": "Sabbatical"}).label == "Sabbatical"
        assert Leave.from_api({"personId": 1}).label == "Leave"


class TestMapBuilders:
    def test_build_team_map(self, teams):
        m = build_team_map(teams)
        assert m[1].name == "Engineering"
        assert m[2].name == "Design"
        assert len(m) == 2

    def test_build_role_map(self, roles):
        assert build_role_map(roles)[10].name == "Senior Developer"

    def test_build_skill_map(self, skills):
        m = build_skill_map(skills)
        assert m[100].name == "TypeScript"
        assert len(m) == 3

    def test_build_person_map(self, people):
        assert build_person_map(people)[1].first_name == "Alice"

    def test_build_client_map(self, clients):
        assert build_client_map(clients)[50].name == "Acme Corp"

    def test_build_project_map(self, projects):
        assert build_project_map(projects)[200].name == "Project Alpha"

    def test_last_write_wins_on_duplicate_ids(self):
        m = build_team_map([Team(id=1, name="Old"), Team(id=1, name="New")])
        assert m[1].name == "New"


class TestPersonName:
    def test_full_name(self):
        assert person_name(Person(id=1, first_name="Alice", last_name="Smith")) == "Alice Smith"

    def test_missing_first_name(self):
        assert person_name(Person(id=1, last_name="Smith")) == "Smith"

    def test_falls_back_to_id(self):
        assert person_name(Person(id=42)) == "Person 42"

    def test_team_name_unknown_team(self, teams):
        assert team_name(Person(id=1, team_id=99), build_team_map(teams)) is None


class TestWorkingDays:
    def test_single_weekday(self):
        assert working_days_between("2026-03-02", "2026-03-02") == 1  # Monday

    def test_single_weekend_day(self):
        assert working_days_between("2026-03-07", "2026-03-07") == 0  # Saturday
        assert working_days_between("2026-03-08", "2026-03-08") == 0  # Sunday

    def test_full_week_inclusive(self):
        # Monday → Sunday
        assert working_days_between("2026-03-02", "2026-03-08") == 5

    def test_friday_to_monday(self):
        assert working_days_between("2026-03-06", "2026-03-09") == 2

    def test_multiple_weeks_plus_remainder(self):
        # Wed 2026-03-04 → Tue 2026-03-17: two full weeks (10) minus nothing
        assert working_days_between("2026-03-04", "2026-03-17") == 10

    @pytest.mark.parametrize("start,end", [(None, "2026-03-02"), ("2026-03-02", None), (None, None), ("", "")])
    def test_missing_dates(self, start, end):
        assert working_days_between(start, end) == 0

    def test_inverted_range(self):
        assert working_days_between("2026-03-10", "2026-03-02") == 0


class TestCalcHelpers:
    def test_parse_date_accepts_timestamp(self):
        assert parse_date("2026-03-02T10:00:00Z") == date(2026, 3, 2)

    def test_parse_date_passthrough(self):
        assert parse_date(date(2026, 1, 1)) == date(2026, 1, 1)

    def test_round2(self):
        assert round2(33.33333) == 33.33

    @pytest.mark.parametrize("value,expected", [
        (0.125, 0.13), (0.375, 0.38), (75.0, 75.0), (0.0, 0.0), (69.444, 69.44),
    ])
    def test_round2_halves_up(self, value, expected):
        assert round2(value) == expected
