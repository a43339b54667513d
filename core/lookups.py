# =============================================================================
# core/lookups.py  —  id → record maps used to resolve foreign keys
# =============================================================================
#
# Every aggregation resolves numeric ids (teamId, roleId, projectId, ...) to
# display names.  These builders turn a fetched list into a dict once, so each
# resolution afterwards is a single dict lookup.  A missing id simply isn't in
# the dict; callers use .get() and fall back to None or a placeholder label.
# =============================================================================

from typing import Iterable, Optional, TypeVar

from core.models import Client, Person, Project, Role, Skill, Team

R = TypeVar("R")


def build_id_map(records: Iterable[R]) -> dict[int, R]:
    """Index records by their `id`.  If ids collide, the last one wins."""
    return {record.id: record for record in records}


def build_team_map(teams: Iterable[Team]) -> dict[int, Team]:
    return build_id_map(teams)


def build_role_map(roles: Iterable[Role]) -> dict[int, Role]:
    return build_id_map(roles)


def build_skill_map(skills: Iterable[Skill]) -> dict[int, Skill]:
    return build_id_map(skills)


def build_person_map(people: Iterable[Person]) -> dict[int, Person]:
    return build_id_map(people)


def build_client_map(clients: Iterable[Client]) -> dict[int, Client]:
    return build_id_map(clients)


def build_project_map(projects: Iterable[Project]) -> dict[int, Project]:
    return build_id_map(projects)


def person_name(person: Person) -> str:
    """Return "First Last", or "Person {id}" when both names are blank."""
    full = f"{person.first_name or ''} {person.last_name or ''}".strip()
    return full or f"Person {person.id}"


def team_name(person: Person, team_map: dict[int, Team]) -> Optional[str]:
    """Name of the person's primary team, or None if it can't be resolved."""
    team_id = person.primary_team_id
    team = team_map.get(team_id) if team_id else None
    return team.name if team and team.name else None
