# =============================================================================
# core/search.py  —  Case-insensitive name search across people/projects/clients
# =============================================================================
#
# People match on "first last" or email; projects and clients on name.
# Results are projected down to a few identifying fields; search is for
# finding ids, and the detail tools take it from there.
#
# A blank query matches nothing.  Only the requested resource types appear as
# keys in the result.
# =============================================================================

from typing import Optional

from core.models import Client, Person, Project

RESOURCE_TYPES = ("people", "projects", "clients")


def resource_types_for(resource_type: str = "all") -> tuple[str, ...]:
    """Expand a resource-type selector ("people", ..., or "all")."""
    if resource_type == "all":
        return RESOURCE_TYPES
    if resource_type in RESOURCE_TYPES:
        return (resource_type,)
    raise ValueError(
        f"Unknown resource type '{resource_type}'. "
        f"Expected one of: {', '.join(RESOURCE_TYPES + ('all',))}"
    )


def _contains(value: Optional[str], query: str) -> bool:
    return bool(value) and query in value.lower()


def search_resources(
    query: str,
    resource_type: str = "all",
    people: Optional[list[Person]] = None,
    projects: Optional[list[Project]] = None,
    clients: Optional[list[Client]] = None,
) -> dict[str, list[dict]]:
    """Filter the given collections by a substring query."""
    q = (query or "").strip().lower()
    results: dict[str, list[dict]] = {}

    for kind in resource_types_for(resource_type):
        if kind == "people":
            results["people"] = [
                {
                    "id": p.id,
                    "name": f"{p.first_name or ''} {p.last_name or ''}".strip(),
                    "email": p.email,
                }
                for p in (people or [])
                if q and (_contains(f"{p.first_name or ''} {p.last_name or ''}", q)
                          or _contains(p.email, q))
            ]
        elif kind == "projects":
            results["projects"] = [
                {"id": p.id, "name": p.name, "start_date": p.start_date, "end_date": p.end_date}
                for p in (projects or [])
                if q and _contains(p.name, q)
            ]
        else:
            results["clients"] = [
                {"id": c.id, "name": c.name}
                for c in (clients or [])
                if q and _contains(c.name, q)
            ]

    return results
