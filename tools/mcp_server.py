# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the five read-only MCP tools over the Runn API.  Each tool is a
#   thin wrapper around a tools/handlers.py function: it logs the call, runs
#   the handler against the shared RunnClient, and returns the result dict.
#
# HOW IT WORKS (the flow):
#   1. An MCP client calls a tool by name (e.g. "get_team_utilization")
#   2. FastMCP validates the arguments against the function signature
#   3. The handler fetches what it needs from Runn (concurrently)
#   4. A pure core/ function joins and aggregates the data
#   5. The dict comes back here and FastMCP serialises it to JSON text
#
# ERRORS:
#   A tool never raises.  Any exception (HTTP error after retries, bad
#   argument, unknown person id) is logged with its traceback and returned as
#       {"error": "Error in <tool>: <message>", "tool": "<tool>"}
#   so one bad request never takes the server down.
#
# RUNNING THIS SERVER:
#   a) Via the entry point:  python main.py
#   b) Standalone:           python -m tools.mcp_server
# =============================================================================

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Literal, Optional

from fastmcp import FastMCP

from runn.client import RunnClient
from runn.config import RunnConfig
from tools import handlers

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout carries the MCP stdio transport, and anything
# else written there would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status/progress messages
#     - RED for tool errors
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Errors
_RESET = "\033[0m"     # Reset to default terminal color

# Responses longer than this are cut in the log line (the client still gets all of it)
_MAX_LOGGED_RESPONSE = 2000


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    text = json.dumps(result, separators=(',', ':'), default=str)
    if len(text) > _MAX_LOGGED_RESPONSE:
        text = text[:_MAX_LOGGED_RESPONSE] + f"... ({len(text)} chars)"
    logging.info(f"{_GREEN}  ← {tool_name} response: {text}{_RESET}")
    return result


def error_result(tool_name: str, err: BaseException) -> dict:
    """Tagged error payload returned in place of a tool result."""
    message = str(err) or err.__class__.__name__
    logging.exception(f"{_RED}  ✗ {tool_name} failed: {message}{_RESET}")
    return {"error": f"Error in {tool_name}: {message}", "tool": tool_name}


# =============================================================================
# Runn client (one per process, created on first use, closed at shutdown)
# =============================================================================
_client: Optional[RunnClient] = None


def get_client() -> RunnClient:
    global _client
    if _client is None:
        _client = RunnClient(RunnConfig.from_env())
    return _client


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Close the shared RunnClient when the server shuts down."""
    global _client
    try:
        yield
    finally:
        if _client is not None:
            await _client.aclose()
            _client = None


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("runn-mcp-server", lifespan=lifespan)


# =============================================================================
# TOOL 1: get_team_utilization
# =============================================================================
@mcp.tool()
async def get_team_utilization(
    team_name: Optional[str] = None,
    include_placeholders: bool = False,
) -> dict:
    """Get utilization from actual billable vs available hours over the last ~20 working days.

    Resolves team and role names and includes team-level summaries with
    average utilization and headcount.

    Args:
        team_name: Filter by team name (case-insensitive partial match).
        include_placeholders: Include placeholder people (default: false).

    Returns:
        A dict with:
          - summary: total_people, avg_utilization_percent,
            total_billable_minutes, total_nonbillable_minutes
          - teams: name, headcount, avg_utilization per team
          - people: per-person utilization_percent, minutes, team, role
    """
    tool = "get_team_utilization"
    _log_request(tool, team_name=team_name, include_placeholders=include_placeholders)
    try:
        result = await handlers.team_utilization(
            get_client(), team_name=team_name, include_placeholders=include_placeholders
        )
    except Exception as e:
        return error_result(tool, e)
    _log_status(f"{result['summary']['total_people']} people, "
                f"avg {result['summary']['avg_utilization_percent']}%")
    return _log_response(tool, result)


# =============================================================================
# TOOL 2: get_project_overview
# =============================================================================
@mcp.tool()
async def get_project_overview(
    name: Optional[str] = None,
    status: Literal["active", "tentative", "archived", "all"] = "active",
) -> dict:
    """Get an overview of projects with client/team names, staffing and budget vs actual.

    Assigned people come with their roles, pricing models are shown as labels,
    and budget (planned assignment minutes) is compared with actual minutes
    recorded over the last 3 months.

    Args:
        name: Filter by project name.
        status: "active" (confirmed), "tentative", "archived" or "all".

    Returns:
        A dict with total_projects and a projects list.  Each project has
        client, team, dates, pricing_model, assigned_people, budget_minutes,
        actual_minutes and budget_vs_actual_percent (null with no budget).
    """
    tool = "get_project_overview"
    _log_request(tool, name=name, status=status)
    try:
        result = await handlers.project_overview(get_client(), name=name, status=status)
    except Exception as e:
        return error_result(tool, e)
    _log_status(f"{result['total_projects']} projects")
    return _log_response(tool, result)


# =============================================================================
# TOOL 3: get_capacity_forecast
# =============================================================================
@mcp.tool()
async def get_capacity_forecast(weeks_ahead: int = 8) -> dict:
    """Get a capacity forecast: weekly utilization buckets, ending assignments and leave.

    Shows who is available when and where staffing gaps are coming up.

    Args:
        weeks_ahead: How many weeks ahead to forecast (default: 8).

    Returns:
        A dict with forecast_weeks, total_people, currently_unassigned,
        with_ending_soon_assignments, weekly_buckets (week_start,
        utilization, available_count) and a per-person forecast.
    """
    tool = "get_capacity_forecast"
    _log_request(tool, weeks_ahead=weeks_ahead)
    try:
        result = await handlers.capacity_forecast(get_client(), weeks_ahead=weeks_ahead)
    except Exception as e:
        return error_result(tool, e)
    _log_status(f"{result['total_people']} people, "
                f"{result['currently_unassigned']} currently unassigned")
    return _log_response(tool, result)


# =============================================================================
# TOOL 4: get_person_details
# =============================================================================
@mcp.tool()
async def get_person_details(person_id: int) -> dict:
    """Get details for one person: team, skills with levels, and assignments with roles.

    Args:
        person_id: The Runn person ID (use search_resources to find it).

    Returns:
        A dict with id, name, email, team, role, skills (name, level) and
        assignments (project_name, project_id, role, dates, minutes_per_day).
    """
    tool = "get_person_details"
    _log_request(tool, person_id=person_id)
    try:
        result = await handlers.person_details(get_client(), person_id)
    except Exception as e:
        return error_result(tool, e)
    _log_status(f"{result['name']}: {len(result['skills'])} skills, "
                f"{len(result['assignments'])} assignments")
    return _log_response(tool, result)


# =============================================================================
# TOOL 5: search_resources
# =============================================================================
@mcp.tool()
async def search_resources(
    query: str,
    resource_type: Literal["people", "projects", "clients", "all"] = "all",
) -> dict:
    """Search people, projects or clients by name (case-insensitive).

    People also match on email.

    Args:
        query: Text to look for in names.
        resource_type: "people", "projects", "clients" or "all" (default).

    Returns:
        A dict keyed by resource type, each a list of matches
        (people: id, name, email; projects: id, name, dates; clients: id, name).
    """
    tool = "search_resources"
    _log_request(tool, query=query, resource_type=resource_type)
    try:
        result = await handlers.search(get_client(), query, resource_type)
    except Exception as e:
        return error_result(tool, e)
    _log_status(", ".join(f"{len(v)} {k}" for k, v in result.items()))
    return _log_response(tool, result)


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    configure_logging()
    mcp.run()
