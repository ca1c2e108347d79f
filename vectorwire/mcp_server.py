"""Minimal MCP server exposing the vectorwire codecs."""
import asyncio
import json
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import ServerCapabilities, Tool, ToolsCapability, TextContent

from vectorwire.distance import Distance, distance_expression
from vectorwire.registry import CODECS, get_codec

server = Server("vectorwire-mcp")

TYPE_NAMES = sorted(CODECS)


def _tool(name: str, description: str, schema: Dict[str, Any]) -> Tool:
    return Tool(name=name, description=description, inputSchema=schema)


TOOLS: List[Tool] = [
    _tool(
        "encode",
        "Encode a pgvector text literal into hex binary wire bytes.",
        {
            "type": "object",
            "properties": {
                "type_name": {"type": "string", "enum": TYPE_NAMES},
                "text": {"type": "string", "description": "e.g. '[1,2,3]', '{1:1,3:2}/5' or '101'"},
            },
            "required": ["type_name", "text"],
            "additionalProperties": False,
        },
    ),
    _tool(
        "decode",
        "Decode hex binary wire bytes into a pgvector text literal.",
        {
            "type": "object",
            "properties": {
                "type_name": {"type": "string", "enum": TYPE_NAMES},
                "hex": {"type": "string"},
            },
            "required": ["type_name", "hex"],
            "additionalProperties": False,
        },
    ),
    _tool(
        "distance_sql",
        "Render a distance expression between a column and a literal value.",
        {
            "type": "object",
            "properties": {
                "distance": {"type": "string", "enum": [d.name.lower() for d in Distance]},
                "column": {"type": "string"},
                "type_name": {"type": "string", "enum": TYPE_NAMES},
                "text": {"type": "string"},
            },
            "required": ["distance", "column", "type_name", "text"],
            "additionalProperties": False,
        },
    ),
    _tool(
        "batch",
        "Run multiple MCP tool calls sequentially.",
        {
            "type": "object",
            "properties": {
                "operations": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "arguments": {"type": "object", "default": {}},
                        },
                        "required": ["name"],
                        "additionalProperties": False,
                    },
                },
                "continue_on_error": {"type": "boolean", "default": False},
            },
            "required": ["operations"],
            "additionalProperties": False,
        },
    ),
]


def _require(args: Dict[str, Any], key: str, tool: str) -> Any:
    if key not in args:
        raise ValueError(f"Missing required argument '{key}' for tool '{tool}'")
    return args[key]


async def _dispatch_tool(name: str, args: Dict[str, Any]) -> Any:
    if name == "encode":
        codec = get_codec(_require(args, "type_name", name))
        value = codec.from_text(_require(args, "text", name))
        return {"type_name": codec.type_name, "hex": codec.encode(value).hex()}
    if name == "decode":
        codec = get_codec(_require(args, "type_name", name))
        value = codec.decode(bytes.fromhex(_require(args, "hex", name)))
        return {"type_name": codec.type_name, "text": value.to_text(), "length": len(value)}
    if name == "distance_sql":
        value = get_codec(_require(args, "type_name", name)).from_text(_require(args, "text", name))
        sql, params = distance_expression(
            _require(args, "distance", name), _require(args, "column", name), value
        ).to_sql()
        return {"sql": sql, "params": [p.to_text() for p in params]}
    if name == "batch":
        operations = _require(args, "operations", name) or []
        continue_on_error = args.get("continue_on_error", False)
        results = []
        for op in operations:
            op_name = op.get("name") if isinstance(op, dict) else None
            op_args = op.get("arguments") if isinstance(op, dict) else {}
            try:
                if not isinstance(op_name, str):
                    raise ValueError("operation.name must be a string")
                result = await _dispatch_tool(op_name, op_args or {})
                results.append({"name": op_name, "result": result})
            except Exception as exc:
                error_payload = {"name": op_name or "<unknown>", "error": str(exc)}
                results.append(error_payload)
                if not continue_on_error:
                    raise
        return results
    raise ValueError(f"Unknown tool '{name}'")


@server.list_tools()
async def list_tools() -> List[Tool]:
    return TOOLS


@server.call_tool()
async def call_tool(name: str, arguments: Dict[str, Any]):
    try:
        result = await _dispatch_tool(name, arguments or {})
        text = json.dumps(result, indent=2, sort_keys=True, default=str)
    except Exception as exc:  # pragma: no cover - surfaced to MCP client
        text = f"Error: {exc}"
    return [TextContent(type="text", text=text)]


async def main():
    # Run MCP server over stdio
    try:
        server_version = version("vectorwire")
    except PackageNotFoundError:  # pragma: no cover - local dev
        server_version = "dev"

    init_opts = InitializationOptions(
        server_name="vectorwire-mcp",
        server_version=server_version,
        capabilities=ServerCapabilities(tools=ToolsCapability()),
    )

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, init_opts)


if __name__ == "__main__":
    asyncio.run(main())
