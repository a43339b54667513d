# =============================================================================
# core/people.py  —  Person detail enrichment
# =============================================================================
#
# A straight join: resolve the person's team, each skill id and each
# assignment's project and role to names.  No arithmetic happens here.
# =============================================================================

from core.lookups import build_project_map, person_name, team_name
from core.models import (
    Assignment,
    Person,
    PersonAssignment,
    PersonDetails,
    PersonSkill,
    Project,
    Role,
    Skill,
    SkillLevel,
    Team,
)


def enrich_person_details(
    person: Person,
    person_skills: list[PersonSkill],
    assignments: list[Assignment],
    projects: list[Project],
    skill_map: dict[int, Skill],
    role_map: dict[int, Role],
    team_map: dict[int, Team],
) -> PersonDetails:
    """Resolve a person's team, skills and assignments to readable names.

    Unknown skills become "Skill {id}" and unknown projects "Project {id}";
    an assignment without a role id gets role None.
    """
    project_map = build_project_map(projects)

    skills = []
    for ps in person_skills:
        skill = skill_map.get(ps.skill_id)
        skills.append(SkillLevel(
            name=skill.name if skill and skill.name else f"Skill {ps.skill_id}",
            level=ps.level,
        ))

    rows = []
    for a in assignments:
        project = project_map.get(a.project_id)
        role = role_map.get(a.role_id) if a.role_id else None
        rows.append(PersonAssignment(
            project_name=project.name if project and project.name else f"Project {a.project_id}",
            project_id=a.project_id,
            role=role.name if role and role.name else None,
            start_date=a.start_date,
            end_date=a.end_date,
            minutes_per_day=a.minutes_per_day,
        ))

    return PersonDetails(
        id=person.id,
        name=person_name(person),
        email=person.email or None,
        team=team_name(person, team_map),
        role=person.role or None,
        skills=skills,
        assignments=rows,
    )
