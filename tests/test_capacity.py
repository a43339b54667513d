"""
Tests for core.capacity.compute_capacity_forecast

All tests pin `today` (a Monday, see conftest.TODAY) so results don't move
with the calendar.
"""

from datetime import timedelta

from core.capacity import compute_capacity_forecast
from core.models import Assignment, Leave, Person


def _forecast(today, people, assignments=(), projects=(), leave=(), teams=(), weeks=8):
    return compute_capacity_forecast(
        list(people), list(assignments), list(projects), list(leave), list(teams),
        weeks_ahead=weeks, today=today,
    )


class TestComputeCapacityForecast:

    def test_basic_forecast(self, today, people, assignments, projects, teams):
        result = _forecast(today, people, assignments, projects, teams=teams, weeks=4)
        assert result.forecast_weeks == 4
        assert result.total_people == 3
        assert len(result.weekly_buckets) == 4
        assert result.weekly_buckets[0].week_start == "2026-03-02"
        assert result.weekly_buckets[1].week_start == "2026-03-09"

    def test_resolves_team_names(self, today, people, assignments, projects, teams):
        result = _forecast(today, people, assignments, projects, teams=teams, weeks=2)
        alice = next(p for p in result.forecast if p.name == "Alice Smith")
        assert alice.team == "Engineering"

    def test_ending_soon_within_horizon(self, today, people, assignments, projects, teams):
        result = _forecast(today, people, assignments, projects, teams=teams, weeks=8)
        # Horizon ends 2026-04-27: Bob's assignment (ends 03-31) qualifies,
        # Carol's (ends 04-30) and Alice's (ends 06-30) do not.
        by_name = {p.name: p for p in result.forecast}
        assert len(by_name["Bob Jones"].ending_soon) == 1
        assert by_name["Bob Jones"].ending_soon[0].project_name == "Project Alpha"
        assert by_name["Bob Jones"].fully_available_after == "2026-03-31"
        assert by_name["Carol Lee"].ending_soon == []
        assert by_name["Carol Lee"].fully_available_after is None
        assert result.with_ending_soon_assignments == 1

    def test_fully_available_after_is_latest_end(self, today, people, projects, teams):
        assignments = [
            Assignment(person_id=1, project_id=200, end_date=(today + timedelta(days=20)).isoformat()),
            Assignment(person_id=1, project_id=201, end_date=(today + timedelta(days=10)).isoformat()),
        ]
        result = _forecast(today, people[:1], assignments, projects, teams=teams)
        alice = result.forecast[0]
        assert len(alice.ending_soon) == 2
        assert alice.fully_available_after == (today + timedelta(days=20)).isoformat()

    def test_assignment_ending_today_is_active(self, today, people):
        assignments = [Assignment(person_id=1, project_id=1, end_date=today.isoformat())]
        result = _forecast(today, people[:1], assignments)
        assert result.forecast[0].active_assignments == 1
        assert result.forecast[0].ending_soon[0].project_name == "Project 1"

    def test_past_assignments_are_not_active(self, today, people):
        assignments = [Assignment(person_id=1, project_id=1, start_date="2025-01-01",
                                  end_date="2025-12-31")]
        result = _forecast(today, people[:1], assignments)
        assert result.forecast[0].active_assignments == 0
        assert result.currently_unassigned == 1

    def test_identifies_unassigned_people(self, today, people, assignments, projects, teams):
        everyone = people + [Person(id=99, first_name="New", last_name="Hire", team_id=1)]
        result = _forecast(today, everyone, assignments, projects, teams=teams, weeks=4)
        assert result.currently_unassigned == 1

    def test_includes_leave(self, today, people):
        leave = [Leave(person_id=1, start_date="2026-03-15", end_date="2026-03-20", leave_type="PTO")]
        result = _forecast(today, people[:1], leave=leave, weeks=4)
        alice = result.forecast[0]
        assert len(alice.upcoming_leave) == 1
        assert alice.upcoming_leave[0].type == "PTO"

    def test_filters_out_expired_leave(self, today, people):
        leave = [Leave(person_id=1, start_date="2020-01-01", end_date="2020-01-10", leave_type="PTO")]
        result = _forecast(today, people[:1], leave=leave, weeks=2)
        assert result.forecast[0].upcoming_leave == []

    def test_open_ended_leave(self, today, people):
        leave = [Leave(person_id=1, start_date="2026-01-01", type="Sabbatical")]
        result = _forecast(today, people[:1], leave=leave, weeks=2)
        entry = result.forecast[0].upcoming_leave[0]
        assert entry.type == "Sabbatical"
        assert entry.end_date is None

    def test_leave_label_defaults(self, today, people):
        leave = [Leave(person_id=1, start_date="2026-04-01", end_date="2026-04-02")]
        result = _forecast(today, people[:1], leave=leave)
        assert result.forecast[0].upcoming_leave[0].type == "Leave"

    def test_weekly_bucket_counts(self, today, people):
        assignments = [
            # Alice: only the first week
            Assignment(person_id=1, project_id=1, start_date="2026-02-01", end_date="2026-03-04"),
            # Bob: starts in week 3
            Assignment(person_id=2, project_id=1, start_date="2026-03-20", end_date="2026-06-01"),
        ]
        result = _forecast(today, people, assignments, weeks=3)
        week0, week1, week2 = result.weekly_buckets
        assert (week0.available_count, week0.utilization) == (2, 33.33)
        assert (week1.available_count, week1.utilization) == (3, 0)
        assert (week2.available_count, week2.utilization) == (2, 33.33)

    def test_open_ended_assignment_fills_every_week(self, today, people, projects, teams):
        assignments = [Assignment(person_id=1, project_id=200, role_id=10,
                                  start_date=None, end_date=None, minutes_per_day=480)]
        result = _forecast(today, people[:1], assignments, projects, teams=teams, weeks=2)
        assert all(b.available_count == 0 for b in result.weekly_buckets)
        assert all(b.utilization == 100 for b in result.weekly_buckets)
        assert result.forecast[0].active_assignments == 1
        assert result.forecast[0].ending_soon == []

    def test_handles_empty_data(self, today):
        result = _forecast(today, [], weeks=2)
        assert result.total_people == 0
        assert len(result.weekly_buckets) == 2
        assert result.weekly_buckets[0].utilization == 0
        assert result.weekly_buckets[0].available_count == 0
