# =============================================================================
# core/projects.py  —  Project overview: names, staffing, budget vs actual
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Enriches each project with:
#     - client and team names
#     - who is assigned, and in which role
#     - a human label for the pricing model
#     - budget minutes (planned) vs actual minutes (recorded)
#
# BUDGET:
#   For each assignment on the project:
#       minutes_per_day × working days between its start and end (inclusive)
#   An assignment missing either date contributes nothing.
#
# BUDGET VS ACTUAL:
#   actual / budget × 100, or None when there is no budget.  A project with no
#   planned time has no meaningful ratio, so it is reported as None rather
#   than 0% or infinity.
# =============================================================================

from typing import Optional, Union

from core.calc import round2, working_days_between
from core.lookups import (
    build_client_map,
    build_person_map,
    build_role_map,
    build_team_map,
    person_name,
)
from core.models import (
    Actual,
    AssignedPerson,
    Assignment,
    Client,
    Person,
    Project,
    ProjectOverview,
    ProjectOverviewResult,
    Role,
    Team,
)

PRICING_MODELS: dict[Union[int, str], str] = {
    0: "Time & Materials",
    1: "Fixed Price",
    2: "Non-Billable",
    # The REST API also sends the short string codes
    "tm": "Time & Materials",
    "fp": "Fixed Price",
    "nb": "Non-Billable",
}

PROJECT_STATUSES = ("active", "tentative", "archived", "all")


def pricing_model_label(code: Optional[Union[int, str]]) -> Optional[str]:
    if code is None or isinstance(code, bool):
        return None
    if isinstance(code, str):
        code = code.strip().lower()
    return PRICING_MODELS.get(code)


def filter_projects_by_status(projects: list[Project], status: str = "active") -> list[Project]:
    """Apply a project status filter.

    "active" keeps confirmed projects, "tentative" unconfirmed ones,
    "archived" those with the archived flag, and "all" keeps everything.
    """
    if status == "all":
        return list(projects)
    if status == "active":
        return [p for p in projects if p.is_confirmed]
    if status == "tentative":
        return [p for p in projects if not p.is_confirmed]
    if status == "archived":
        return [p for p in projects if p.is_archived]
    raise ValueError(f"Unknown project status '{status}'. Expected one of: {', '.join(PROJECT_STATUSES)}")


def _assignment_budget(assignment: Assignment) -> int:
    return (assignment.minutes_per_day or 0) * working_days_between(
        assignment.start_date, assignment.end_date
    )


def enrich_project_overview(
    projects: list[Project],
    assignments: list[Assignment],
    actuals: list[Actual],
    clients: list[Client],
    teams: list[Team],
    people: list[Person],
    roles: list[Role],
) -> ProjectOverviewResult:
    """Build one overview row per project, in the order given."""
    client_map = build_client_map(clients)
    team_map = build_team_map(teams)
    person_map = build_person_map(people)
    role_map = build_role_map(roles)

    assignments_by_project: dict[int, list[Assignment]] = {}
    for assignment in assignments:
        assignments_by_project.setdefault(assignment.project_id, []).append(assignment)

    actual_minutes_by_project: dict[int, int] = {}
    for actual in actuals:
        actual_minutes_by_project[actual.project_id] = (
            actual_minutes_by_project.get(actual.project_id, 0)
            + (actual.billable_minutes or 0)
            + (actual.nonbillable_minutes or 0)
        )

    rows: list[ProjectOverview] = []
    for project in projects:
        project_assignments = assignments_by_project.get(project.id, [])
        actual_minutes = actual_minutes_by_project.get(project.id, 0)
        budget_minutes = sum(_assignment_budget(a) for a in project_assignments)

        # First assignment per person decides the role shown
        first_by_person: dict[int, Assignment] = {}
        for assignment in project_assignments:
            first_by_person.setdefault(assignment.person_id, assignment)

        assigned_people = []
        for person_id, assignment in first_by_person.items():
            person = person_map.get(person_id)
            role = role_map.get(assignment.role_id) if assignment.role_id else None
            assigned_people.append(AssignedPerson(
                id=person_id,
                name=person_name(person) if person else f"Person {person_id}",
                role=role.name if role and role.name else None,
            ))

        client = client_map.get(project.client_id) if project.client_id else None
        team = team_map.get(project.team_id) if project.team_id else None

        rows.append(ProjectOverview(
            id=project.id,
            name=project.name,
            client=client.name if client and client.name else None,
            team=team.name if team and team.name else None,
            start_date=project.start_date or None,
            end_date=project.end_date or None,
            is_confirmed=bool(project.is_confirmed),
            is_tentative=bool(project.is_tentative),
            pricing_model=pricing_model_label(project.pricing_model),
            assignment_count=len(project_assignments),
            assigned_people=assigned_people,
            budget_minutes=budget_minutes,
            actual_minutes=actual_minutes,
            budget_vs_actual_percent=(
                round2(actual_minutes / budget_minutes * 100) if budget_minutes > 0 else None
            ),
        ))

    return ProjectOverviewResult(total_projects=len(rows), projects=rows)
