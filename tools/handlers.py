# =============================================================================
# tools/handlers.py  —  Fetch-then-aggregate, one function per MCP tool
# =============================================================================
#
# HOW EACH HANDLER WORKS:
#   1. Start every fetch the tool needs at once (asyncio.gather).  Each fetch
#      paginates and retries on its own; a retry in one does not hold up the
#      others.
#   2. Hand the fetched dataclasses to ONE pure core/ function.
#   3. Return the result as a plain dict (asdict) for FastMCP to serialise.
#
# The handlers take the RunnClient as an argument so tests can pass a fake
# one; tools/mcp_server.py supplies the real client.
# =============================================================================

import asyncio
from dataclasses import asdict
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from core.capacity import compute_capacity_forecast
from core.lookups import build_role_map, build_skill_map, build_team_map
from core.people import enrich_person_details
from core.projects import PROJECT_STATUSES, enrich_project_overview, filter_projects_by_status
from core.search import resource_types_for, search_resources
from core.utilization import compute_utilization
from runn.client import RunnClient

# Actuals window for utilization: ~30 calendar days ≈ 20 working days
UTILIZATION_LOOKBACK_DAYS = 30
UTILIZATION_WORKING_DAYS = 20

# Actuals window for budget vs actual on projects
PROJECT_ACTUALS_LOOKBACK_MONTHS = 3


async def team_utilization(
    client: RunnClient,
    team_name: Optional[str] = None,
    include_placeholders: bool = False,
    today: Optional[date] = None,
) -> dict:
    today = today or date.today()
    min_date = (today - timedelta(days=UTILIZATION_LOOKBACK_DAYS)).isoformat()

    people, assignments, actuals, teams, roles = await asyncio.gather(
        client.list_people(include_placeholders=include_placeholders),
        client.list_assignments(),
        client.list_actuals(min_date=min_date, max_date=today.isoformat()),
        client.list_teams(),
        client.list_roles(),
    )

    result = compute_utilization(
        people, assignments, actuals, teams, roles,
        team_name_filter=team_name,
        date_range_days=UTILIZATION_WORKING_DAYS,
    )
    return asdict(result)


async def project_overview(
    client: RunnClient,
    name: Optional[str] = None,
    status: str = "active",
    today: Optional[date] = None,
) -> dict:
    if status not in PROJECT_STATUSES:
        raise ValueError(
            f"Unknown project status '{status}'. Expected one of: {', '.join(PROJECT_STATUSES)}"
        )
    today = today or date.today()
    min_date = (today - relativedelta(months=PROJECT_ACTUALS_LOOKBACK_MONTHS)).isoformat()

    projects, assignments, actuals, clients, teams, people, roles = await asyncio.gather(
        client.list_projects(include_archived=status in ("archived", "all"), name=name),
        client.list_assignments(),
        client.list_actuals(min_date=min_date, max_date=today.isoformat()),
        client.list_clients(),
        client.list_teams(),
        client.list_people(),
        client.list_roles(),
    )

    result = enrich_project_overview(
        filter_projects_by_status(projects, status),
        assignments, actuals, clients, teams, people, roles,
    )
    return asdict(result)


async def capacity_forecast(
    client: RunnClient,
    weeks_ahead: int = 8,
    today: Optional[date] = None,
) -> dict:
    people, assignments, projects, leave, teams = await asyncio.gather(
        client.list_people(),
        client.list_assignments(),
        client.list_projects(),
        client.list_leave(),
        client.list_teams(),
    )

    result = compute_capacity_forecast(
        people, assignments, projects, leave, teams,
        weeks_ahead=weeks_ahead,
        today=today,
    )
    return asdict(result)


async def person_details(client: RunnClient, person_id: int) -> dict:
    person, person_skills, assignments, projects, skills, roles, teams = await asyncio.gather(
        client.get_person(person_id),
        client.list_person_skills(person_id),
        client.list_assignments(person_id=person_id),
        client.list_projects(),
        client.list_skills(),
        client.list_roles(),
        client.list_teams(),
    )

    result = enrich_person_details(
        person,
        person_skills,
        assignments,
        projects,
        skill_map=build_skill_map(skills),
        role_map=build_role_map(roles),
        team_map=build_team_map(teams),
    )
    return asdict(result)


async def search(client: RunnClient, query: str, resource_type: str = "all") -> dict:
    kinds = resource_types_for(resource_type)

    # Only fetch the collections being searched
    fetchers = {
        "people": client.list_people,
        "projects": client.list_projects,
        "clients": client.list_clients,
    }
    fetched = await asyncio.gather(*(fetchers[kind]() for kind in kinds))
    collections = dict(zip(kinds, fetched))

    return search_resources(
        query,
        resource_type,
        people=collections.get("people"),
        projects=collections.get("projects"),
        clients=collections.get("clients"),
    )
