"""HTTP runner for MCP server (remote deployment)."""
import os
os.environ.setdefault("TRANSCRIPT_SEARCH_MODE", "standalone")

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.server import TransportSecuritySettings
from transcript_search_mcp.server import (
    app_lifespan,
    get_transcript,
    search_transcript,
    find_key_moments,
    help_resource,
    TOOL_ANNOTATIONS,
)

server = FastMCP(
    "Transcript Search",
    instructions="Search video transcripts, including phrases that run across caption boundaries",
    lifespan=app_lifespan,
    host="0.0.0.0",
    port=int(os.environ.get("PORT", "8401")),
    transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
)

# Register tools with annotations
server.tool(annotations=TOOL_ANNOTATIONS)(get_transcript)
server.tool(annotations=TOOL_ANNOTATIONS)(search_transcript)

# Register prompts
server.prompt()(find_key_moments)

# Register resources
server.resource("transcript://help")(help_resource)

server.run(transport="streamable-http")
