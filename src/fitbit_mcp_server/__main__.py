"""
Entry point for running fitbit_mcp_server as a module.

Usage:
    python -m fitbit_mcp_server                    # Run with stdio transport
    python -m fitbit_mcp_server --http             # Run with streamable HTTP transport
    python -m fitbit_mcp_server --http --port 9000 # Run HTTP on custom port
"""

from fitbit_mcp_server.server import main

if __name__ == "__main__":
    main()
