# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL data-shaping logic for the Runn MCP server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or an HTTP library.  The
#   aggregation modules (utilization, projects, capacity, people, search)
#   take already-fetched dataclasses and return result dataclasses; they do
#   no I/O.  pagination.py works against plain async callables, so the
#   retry and cursor logic is testable without a network.
# =============================================================================
