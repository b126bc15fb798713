"""
Sport Coach, an AI running coach.

Pulls training data from Intervals.icu, lets a tool-calling language model
create or adjust the weekly plan in Notion, and replies on Telegram.

Surfaces:
- console: one check-in, result printed (and optionally sent to Telegram)
- bot: Telegram long polling, every message becomes a check-in
- serve: MCP server exposing the coach as tools (stdio or http)
"""

import os

from fastmcp import FastMCP

from sport_coach import coach_tools


def create_app() -> FastMCP:
    """Create and configure the MCP app with all tools registered."""
    app = FastMCP("Sport Coach v1.0")
    app = coach_tools.register_tools(app)
    return app


def main():
    """Initialize the MCP server and run with configured transport.

    Environment variables:
    - MCP_TRANSPORT: 'stdio' (default) or 'http'
    - MCP_HOST: Host to bind to (default: '0.0.0.0')
    - MCP_PORT: Port for HTTP transport (default: 8081)
    """
    app = create_app()

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "http":
        host = os.environ.get("MCP_HOST", "0.0.0.0")
        port = int(os.environ.get("MCP_PORT", "8081"))
        app.run(transport="http", host=host, port=port)
    else:
        app.run()
