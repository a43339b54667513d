"""
Pytest configuration and shared fixtures.

Puts the project root on sys.path and provides a small Runn dataset
(three people in two teams, two projects, assignments and actuals).
"""

import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from core.models import Actual, Assignment, Client, Person, Project, Role, Skill, Team

# A Monday, so week arithmetic in forecast tests is easy to follow
TODAY = date(2026, 3, 2)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def teams():
    return [Team(id=1, name="Engineering"), Team(id=2, name="Design")]


@pytest.fixture
def roles():
    return [Role(id=10, name="Senior Developer"), Role(id=11, name="Designer")]


@pytest.fixture
def skills():
    return [Skill(id=100, name="TypeScript"), Skill(id=101, name="React"), Skill(id=102, name="Figma")]


@pytest.fixture
def people():
    return [
        Person(id=1, first_name="Alice", last_name="Smith", email="alice@co.com", team_id=1),
        Person(id=2, first_name="Bob", last_name="Jones", email="bob@co.com", team_id=1),
        Person(id=3, first_name="Carol", last_name="Lee", email="carol@co.com", team_id=2),
    ]


@pytest.fixture
def clients():
    return [Client(id=50, name="Acme Corp"), Client(id=51, name="Widget Inc")]


@pytest.fixture
def projects():
    return [
        Project(id=200, name="Project Alpha", client_id=50, team_id=1,
                start_date="2026-01-01", end_date="2026-06-30",
                is_confirmed=True, is_tentative=False, pricing_model=0),
        Project(id=201, name="Project Beta", client_id=51, team_id=2,
                start_date="2026-02-01", end_date="2026-04-30",
                is_confirmed=False, is_tentative=True, pricing_model=1),
    ]


@pytest.fixture
def assignments():
    return [
        Assignment(person_id=1, project_id=200, role_id=10,
                   start_date="2026-01-01", end_date="2026-06-30", minutes_per_day=480),
        Assignment(person_id=2, project_id=200, role_id=10,
                   start_date="2026-01-15", end_date="2026-03-31", minutes_per_day=240),
        Assignment(person_id=3, project_id=201, role_id=11,
                   start_date="2026-02-01", end_date="2026-04-30", minutes_per_day=480),
    ]


@pytest.fixture
def actuals():
    return [
        Actual(person_id=1, project_id=200, role_id=10, date="2026-02-01",
               billable_minutes=7200, nonbillable_minutes=600),
        Actual(person_id=2, project_id=200, role_id=10, date="2026-02-01",
               billable_minutes=3600, nonbillable_minutes=200),
        Actual(person_id=3, project_id=201, role_id=11, date="2026-02-01",
               billable_minutes=5400, nonbillable_minutes=1000),
    ]
