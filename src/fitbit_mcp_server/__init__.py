"""
Fitbit MCP Server

Exposes the Fitbit Web API as Model Context Protocol tools.
"""

__version__ = "1.0.0"
