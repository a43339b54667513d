# =============================================================================
# core/utilization.py  —  Team & person utilization from recorded actuals
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns raw timesheet entries (actuals) into utilization percentages:
#
#     utilization % = billable minutes / available minutes × 100
#     available     = date_range_days × 480   (an 8-hour standard day)
#
#   `date_range_days` is the number of WORKING days the actuals were fetched
#   for.  The caller decides the window; this function only does arithmetic
#   on whatever it is handed.
#
# ROLE RESOLUTION:
#   A person's displayed role comes from their FIRST assignment's roleId in
#   the order the API returned assignments.  When that does not resolve, the
#   person's own free-text `role` field is used.
# =============================================================================

from typing import Optional

from core.calc import STANDARD_DAY_MINUTES, round2
from core.lookups import build_role_map, build_team_map, person_name, team_name
from core.models import (
    Actual,
    Assignment,
    Person,
    PersonUtilization,
    Role,
    Team,
    TeamUtilization,
    UtilizationResult,
    UtilizationSummary,
)

UNASSIGNED_TEAM = "Unassigned"


def filter_people_by_team(
    people: list[Person], teams: list[Team], team_name_filter: Optional[str]
) -> list[Person]:
    """Keep people in any team whose name contains the filter (case-insensitive)."""
    if not team_name_filter:
        return list(people)

    query = team_name_filter.strip().lower()
    matching_ids = {t.id for t in teams if t.name and query in t.name.lower()}
    return [p for p in people if p.all_team_ids & matching_ids]


def compute_utilization(
    people: list[Person],
    assignments: list[Assignment],
    actuals: list[Actual],
    teams: list[Team],
    roles: list[Role],
    team_name_filter: Optional[str] = None,
    date_range_days: int = 20,
) -> UtilizationResult:
    """Compute per-person, per-team and overall utilization.

    Args:
        people: Everyone to consider (placeholders already in or out).
        assignments: Used for role resolution and the active-assignment count.
        actuals: Timesheet entries for the window being measured.
        teams: For team-name resolution and the optional filter.
        roles: For role-name resolution.
        team_name_filter: Optional case-insensitive substring of a team name.
        date_range_days: Working days in the measured window.

    Returns:
        A UtilizationResult with summary totals, team summaries and
        one row per person.
    """
    team_map = build_team_map(teams)
    role_map = build_role_map(roles)
    selected = filter_people_by_team(people, teams, team_name_filter)

    # --- Sum actuals per person ---
    minutes_by_person: dict[int, list[int]] = {}
    for actual in actuals:
        totals = minutes_by_person.setdefault(actual.person_id, [0, 0])
        totals[0] += actual.billable_minutes or 0
        totals[1] += actual.nonbillable_minutes or 0

    assignments_by_person: dict[int, list[Assignment]] = {}
    for assignment in assignments:
        assignments_by_person.setdefault(assignment.person_id, []).append(assignment)

    available_minutes = date_range_days * STANDARD_DAY_MINUTES

    rows: list[PersonUtilization] = []
    total_billable = 0
    total_nonbillable = 0

    for person in selected:
        billable, nonbillable = minutes_by_person.get(person.id, (0, 0))
        total_billable += billable
        total_nonbillable += nonbillable

        utilization = round2(billable / available_minutes * 100) if available_minutes > 0 else 0

        person_assignments = assignments_by_person.get(person.id, [])
        role = None
        if person_assignments and person_assignments[0].role_id:
            role = role_map.get(person_assignments[0].role_id)

        rows.append(PersonUtilization(
            id=person.id,
            name=person_name(person),
            email=person.email or None,
            team=team_name(person, team_map),
            role=(role.name if role and role.name else None) or person.role or None,
            utilization_percent=utilization,
            billable_minutes=billable,
            nonbillable_minutes=nonbillable,
            active_assignments=len(person_assignments),
        ))

    # --- Team summaries, in first-seen order ---
    team_totals: dict[str, list[float]] = {}
    for row in rows:
        stats = team_totals.setdefault(row.team or UNASSIGNED_TEAM, [0.0, 0])
        stats[0] += row.utilization_percent
        stats[1] += 1

    team_rows = [
        TeamUtilization(name=name, headcount=int(count), avg_utilization=round2(total / count))
        for name, (total, count) in team_totals.items()
    ]

    avg = round2(sum(r.utilization_percent for r in rows) / len(rows)) if rows else 0

    return UtilizationResult(
        summary=UtilizationSummary(
            total_people=len(rows),
            avg_utilization_percent=avg,
            total_billable_minutes=total_billable,
            total_nonbillable_minutes=total_nonbillable,
        ),
        teams=team_rows,
        people=rows,
    )
