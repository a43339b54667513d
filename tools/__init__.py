# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool layer.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP clients and the core logic:
#     handlers.py    fetches the collections each tool needs from Runn
#                    (concurrently) and calls one core/ aggregation
#     mcp_server.py  registers the tools, logs calls, and turns exceptions
#                    into tagged error payloads
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT contain aggregation logic (that's in core/)
#   - They do NOT speak HTTP directly (that's runn/client.py)
#
# TOOL CONTRACTS:
#   Each tool has a descriptive get_*/search_* name, a docstring the model
#   reads to decide when to call it, typed parameters, and a documented
#   return shape.  All tools are read-only.
# =============================================================================
