# =============================================================================
# ClickUp MCP Server
# =============================================================================
"""
ClickUp MCP Server package.

This package provides MCP tools for reading and exporting ClickUp tasks,
with response size limits, client-side status filtering when the API
rejects a status filter, and CSV export with normalized phone numbers.
"""

__version__ = "0.1.0"
