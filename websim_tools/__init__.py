# =============================================================================
# websim_tools/__init__.py
# =============================================================================
# This package exposes the websim/ handlers as MCP tools.
#
# ARCHITECTURAL ROLE:
#   websim_tools/ is the translation layer between the MCP transport and the
#   handler functions in websim/.  It:
#     1. declares every tool once, in registry.py (name, description,
#        constraint table, handler)
#     2. validates arguments against the constraint table (schema.py)
#     3. routes a call to its handler and wraps the outcome in a success or
#        error envelope (dispatcher.py)
#     4. publishes the registry through FastMCP over stdio (mcp_server.py)
#
# WHAT THIS PACKAGE DOES NOT DO:
#   - It does NOT build URLs or parse upstream JSON (that's websim/)
#   - It does NOT keep anything between calls; each call stands alone
# =============================================================================
