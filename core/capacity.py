# =============================================================================
# core/capacity.py  —  Capacity forecast: who frees up, who is on leave
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Looks `weeks_ahead` weeks forward from today and answers:
#     - Which assignments are still active, and which end inside the horizon?
#     - When is each person fully available (latest ending-soon end date)?
#     - What ongoing or future leave does each person have?
#     - Week by week, how many people are booked vs available?
#
# OPEN-ENDED DATES:
#   A missing start or end date is unbounded on that side.  An assignment
#   with neither date overlaps every week.
#
# "TODAY":
#   Defaults to date.today().  Tests pass a fixed `today` so results do not
#   drift with the calendar.
# =============================================================================

from datetime import date, timedelta
from typing import Optional

from core.calc import parse_date, round2
from core.lookups import build_project_map, build_team_map, person_name, team_name
from core.models import (
    Assignment,
    CapacityForecastResult,
    ForecastAssignment,
    Leave,
    Person,
    PersonForecast,
    Project,
    Team,
    UpcomingLeave,
    WeeklyBucket,
)


def _overlaps(assignment: Assignment, window_start: date, window_end: date) -> bool:
    start = parse_date(assignment.start_date)
    end = parse_date(assignment.end_date)
    return (start is None or start <= window_end) and (end is None or end >= window_start)


def compute_capacity_forecast(
    people: list[Person],
    assignments: list[Assignment],
    projects: list[Project],
    leave: list[Leave],
    teams: list[Team],
    weeks_ahead: int = 8,
    today: Optional[date] = None,
) -> CapacityForecastResult:
    """Forecast staffing for the next `weeks_ahead` weeks.

    Args:
        people: Everyone in the forecast.
        assignments: All assignments (any person); filtered per person here.
        projects: For project-name resolution on ending-soon assignments.
        leave: All leave entries; past leave is dropped.
        teams: For team-name resolution.
        weeks_ahead: Forecast horizon in weeks.
        today: The reference date; defaults to date.today().

    Returns:
        A CapacityForecastResult with weekly buckets and a per-person forecast.
    """
    today = today or date.today()
    horizon_end = today + timedelta(days=weeks_ahead * 7)
    project_map = build_project_map(projects)
    team_map = build_team_map(teams)

    assignments_by_person: dict[int, list[Assignment]] = {}
    for assignment in assignments:
        assignments_by_person.setdefault(assignment.person_id, []).append(assignment)

    leave_by_person: dict[int, list[Leave]] = {}
    for entry in leave:
        leave_by_person.setdefault(entry.person_id, []).append(entry)

    forecast: list[PersonForecast] = []
    for person in people:
        active: list[Assignment] = []
        ending_soon: list[ForecastAssignment] = []

        for assignment in assignments_by_person.get(person.id, []):
            end = parse_date(assignment.end_date)
            if end is not None and end < today:
                continue
            active.append(assignment)
            if end is not None and end <= horizon_end:
                project = project_map.get(assignment.project_id)
                ending_soon.append(ForecastAssignment(
                    project_name=(project.name if project and project.name
                                  else f"Project {assignment.project_id}"),
                    start_date=assignment.start_date,
                    end_date=assignment.end_date,
                    minutes_per_day=assignment.minutes_per_day,
                ))

        upcoming_leave = []
        for entry in leave_by_person.get(person.id, []):
            end = parse_date(entry.end_date)
            if end is None or end >= today:
                upcoming_leave.append(UpcomingLeave(
                    start_date=entry.start_date,
                    end_date=entry.end_date,
                    type=entry.label,
                ))

        fully_available_after = None
        if ending_soon:
            fully_available_after = max(
                ending_soon, key=lambda a: parse_date(a.end_date)
            ).end_date

        forecast.append(PersonForecast(
            id=person.id,
            name=person_name(person),
            team=team_name(person, team_map),
            active_assignments=len(active),
            ending_soon=ending_soon,
            upcoming_leave=upcoming_leave,
            fully_available_after=fully_available_after,
        ))

    # --- Weekly buckets ---
    total = len(people)
    buckets: list[WeeklyBucket] = []
    for week in range(weeks_ahead):
        week_start = today + timedelta(days=week * 7)
        week_end = week_start + timedelta(days=7)
        assigned = sum(
            1 for person in people
            if any(_overlaps(a, week_start, week_end)
                   for a in assignments_by_person.get(person.id, []))
        )
        buckets.append(WeeklyBucket(
            week_start=week_start.isoformat(),
            utilization=round2(assigned / total * 100) if total > 0 else 0,
            available_count=total - assigned,
        ))

    return CapacityForecastResult(
        forecast_weeks=weeks_ahead,
        total_people=len(forecast),
        currently_unassigned=sum(1 for p in forecast if p.active_assignments == 0),
        with_ending_soon_assignments=sum(1 for p in forecast if p.ending_soon),
        weekly_buckets=buckets,
        forecast=forecast,
    )
