# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Two kinds of dataclasses live here:
#
#   1. INPUT RECORDS — one per Runn entity (Person, Project, Assignment, ...).
#      Each has a `from_api()` classmethod that reads the camelCase JSON the
#      Runn REST API returns.  Any field that can be missing upstream is
#      Optional with a documented default, so the aggregation code never has
#      to guess whether a key exists.
#
#   2. RESULT RECORDS — what each tool returns (UtilizationResult,
#      ProjectOverviewResult, ...).  Tools convert them with asdict() before
#      handing them to FastMCP.
#
# Dates are kept as the ISO "YYYY-MM-DD" strings the API sends.  None means
# "open-ended".  Parsing happens in core/calc.py, at the point of comparison.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional, Union


def _int_list(value: Any) -> list[int]:
    return [v for v in (value or []) if v is not None]


# -----------------------------------------------------------------------------
# Lookup entities — id + name, nothing else matters to the tools
# -----------------------------------------------------------------------------
@dataclass
class Team:
    id: int
    name: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Team":
        return cls(id=data["id"], name=data.get("name"))


@dataclass
class Role:
    id: int
    name: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Role":
        return cls(id=data["id"], name=data.get("name"))


@dataclass
class Skill:
    id: int
    name: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Skill":
        return cls(id=data["id"], name=data.get("name"))


@dataclass
class Client:
    id: int
    name: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Client":
        return cls(id=data["id"], name=data.get("name"))


# -----------------------------------------------------------------------------
# Person — a member of staff (or a placeholder)
# -----------------------------------------------------------------------------
# Runn has moved between a single `teamId` and a `teamIds` list over API
# versions, so both are kept.  `primary_team_id` is the one used for display.
# -----------------------------------------------------------------------------
@dataclass
class Person:
    """A person in the Runn account."""

    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    team_id: Optional[int] = None
    team_ids: list[int] = field(default_factory=list)
    role: Optional[str] = None          # Free-text role, used when no assignment role resolves
    is_placeholder: bool = False

    @property
    def primary_team_id(self) -> Optional[int]:
        if self.team_id:
            return self.team_id
        return self.team_ids[0] if self.team_ids else None

    @property
    def all_team_ids(self) -> set[int]:
        ids = set(self.team_ids)
        if self.team_id:
            ids.add(self.team_id)
        return ids

    @classmethod
    def from_api(cls, data: dict) -> "Person":
        return cls(
            id=data["id"],
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            email=data.get("email"),
            team_id=data.get("teamId"),
            team_ids=_int_list(data.get("teamIds")),
            role=data.get("role") if isinstance(data.get("role"), str) else None,
            is_placeholder=bool(data.get("isPlaceholder", False)),
        )


@dataclass
class PersonSkill:
    """A skill held by a person, with the level Runn records (1-5)."""

    skill_id: int
    level: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> "PersonSkill":
        return cls(skill_id=data["skillId"], level=data.get("level"))


# -----------------------------------------------------------------------------
# Project
# -----------------------------------------------------------------------------
# `pricing_model` is whatever code the API sends (numeric or the short string
# form).  core/projects.py turns it into a label.
# -----------------------------------------------------------------------------
@dataclass
class Project:
    id: int
    name: Optional[str] = None
    client_id: Optional[int] = None
    team_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_confirmed: bool = False
    is_tentative: bool = False
    is_archived: bool = False
    pricing_model: Optional[Union[int, str]] = None

    @classmethod
    def from_api(cls, data: dict) -> "Project":
        return cls(
            id=data["id"],
            name=data.get("name"),
            client_id=data.get("clientId"),
            team_id=data.get("teamId"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            is_confirmed=bool(data.get("isConfirmed", False)),
            is_tentative=bool(data.get("isTentative", False)),
            is_archived=bool(data.get("isArchived", False)),
            pricing_model=data.get("pricingModel"),
        )


# -----------------------------------------------------------------------------
# Assignment — a person booked onto a project for a date range
# -----------------------------------------------------------------------------
@dataclass
class Assignment:
    person_id: int
    project_id: int
    role_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    minutes_per_day: int = 0
    id: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> "Assignment":
        return cls(
            id=data.get("id"),
            person_id=data["personId"],
            project_id=data["projectId"],
            role_id=data.get("roleId"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            minutes_per_day=data.get("minutesPerDay") or 0,
        )


# -----------------------------------------------------------------------------
# Actual — one timesheet entry (historical recorded time)
# -----------------------------------------------------------------------------
@dataclass
class Actual:
    person_id: int
    project_id: Optional[int] = None
    role_id: Optional[int] = None
    date: Optional[str] = None
    billable_minutes: int = 0
    nonbillable_minutes: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "Actual":
        return cls(
            person_id=data["personId"],
            project_id=data.get("projectId"),
            role_id=data.get("roleId"),
            date=data.get("date"),
            billable_minutes=data.get("billableMinutes") or 0,
            nonbillable_minutes=data.get("nonbillableMinutes") or 0,
        )


# -----------------------------------------------------------------------------
# Leave — time off.  A missing end date means open-ended.
# -----------------------------------------------------------------------------
@dataclass
class Leave:
    person_id: int
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    leave_type: Optional[str] = None
    type: Optional[str] = None          # Older payloads use `type` instead of `leaveType`

    @property
    def label(self) -> str:
        return self.leave_type or self.type or "Leave"

    @classmethod
    def from_api(cls, data: dict) -> "Leave":
        return cls(
            person_id=data["personId"],
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            leave_type=data.get("leaveType"),
            type=data.get("type"),
        )


# =============================================================================
# RESULT RECORDS
# =============================================================================

# --- get_team_utilization ---------------------------------------------------
@dataclass
class UtilizationSummary:
    total_people: int
    avg_utilization_percent: float
    total_billable_minutes: int
    total_nonbillable_minutes: int


@dataclass
class TeamUtilization:
    name: str
    headcount: int
    avg_utilization: float


@dataclass
class PersonUtilization:
    id: int
    name: str
    email: Optional[str]
    team: Optional[str]
    role: Optional[str]
    utilization_percent: float
    billable_minutes: int
    nonbillable_minutes: int
    active_assignments: int


@dataclass
class UtilizationResult:
    summary: UtilizationSummary
    teams: list[TeamUtilization] = field(default_factory=list)
    people: list[PersonUtilization] = field(default_factory=list)


# --- get_project_overview ---------------------------------------------------
@dataclass
class AssignedPerson:
    id: int
    name: str
    role: Optional[str]


@dataclass
class ProjectOverview:
    id: int
    name: Optional[str]
    client: Optional[str]
    team: Optional[str]
    start_date: Optional[str]
    end_date: Optional[str]
    is_confirmed: bool
    is_tentative: bool
    pricing_model: Optional[str]
    assignment_count: int
    assigned_people: list[AssignedPerson]
    budget_minutes: int
    actual_minutes: int
    budget_vs_actual_percent: Optional[float]   # None when there is no budget


@dataclass
class ProjectOverviewResult:
    total_projects: int
    projects: list[ProjectOverview] = field(default_factory=list)


# --- get_capacity_forecast --------------------------------------------------
@dataclass
class ForecastAssignment:
    project_name: str
    start_date: Optional[str]
    end_date: Optional[str]
    minutes_per_day: int


@dataclass
class UpcomingLeave:
    start_date: Optional[str]
    end_date: Optional[str]
    type: str


@dataclass
class PersonForecast:
    id: int
    name: str
    team: Optional[str]
    active_assignments: int
    ending_soon: list[ForecastAssignment] = field(default_factory=list)
    upcoming_leave: list[UpcomingLeave] = field(default_factory=list)
    fully_available_after: Optional[str] = None


@dataclass
class WeeklyBucket:
    week_start: str
    utilization: float
    available_count: int


@dataclass
class CapacityForecastResult:
    forecast_weeks: int
    total_people: int
    currently_unassigned: int
    with_ending_soon_assignments: int
    weekly_buckets: list[WeeklyBucket] = field(default_factory=list)
    forecast: list[PersonForecast] = field(default_factory=list)


# --- get_person_details -----------------------------------------------------
@dataclass
class SkillLevel:
    name: str
    level: Optional[int]


@dataclass
class PersonAssignment:
    project_name: str
    project_id: int
    role: Optional[str]
    start_date: Optional[str]
    end_date: Optional[str]
    minutes_per_day: int


@dataclass
class PersonDetails:
    id: int
    name: str
    email: Optional[str]
    team: Optional[str]
    role: Optional[str]
    skills: list[SkillLevel] = field(default_factory=list)
    assignments: list[PersonAssignment] = field(default_factory=list)
