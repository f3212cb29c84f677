"""MCP server bridging JSON-RPC tool calls on stdio to Weaviate GraphQL queries.

Run with: weaviate-mcp-server (or python -m weaviate_kb.mcp.server)
"""

import copy
import json
import logging
import sys
from typing import IO, Any, Dict, Optional, TextIO, Union

from .. import __version__
from ..config import load_settings
from ..vectorstore.client import WeaviateClient
from ..vectorstore.query import DEFAULT_LIMIT, build_graphql_query, validate_name
from .json_rpc import ErrorCodes, error_response, success_response
from .tools import TOOLS, WEAVIATE_QUERY_TOOL

SERVER_NAME = "weaviate-mcp-server"
PROTOCOL_VERSION = "2024-11-05"


class WeaviateMCPServer:
    """
    Line-delimited JSON-RPC server exposing the weaviate_query tool.

    Every request line is answered with exactly one response line, in order.
    Notifications (no id, notifications/* methods) are not answered. Lines
    that are not valid UTF-8 JSON get a parse error and the loop goes on.
    """

    def __init__(self, client: WeaviateClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)
        self.handlers = {
            "initialize": self.handle_initialize,
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
        }

    def run(self, stdin: Optional[IO] = None, stdout: Optional[TextIO] = None) -> None:
        """
        Serve requests until the input stream is exhausted.

        Text streams backed by a binary buffer are read as bytes so that each
        line is decoded on its own and an undecodable line cannot end the loop.
        """
        stdin = stdin or sys.stdin
        stdin = getattr(stdin, "buffer", stdin)
        stdout = stdout or sys.stdout
        self.logger.info(f"Starting Weaviate MCP Server v{__version__}")

        while True:
            line = stdin.readline()
            if not line:
                break

            response = self.handle_line(line)
            if response is None:
                continue

            stdout.write(json.dumps(response) + "\n")
            stdout.flush()

        self.logger.info("Input closed, shutting down")

    def handle_line(self, line: Union[str, bytes]) -> Optional[Dict[str, Any]]:
        """Turn one input line into its response, or None when no response is due."""
        try:
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            line = line.strip()
            if not line:
                return None
            request = json.loads(line)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            self.logger.error(f"JSON parsing error: {e}")
            return error_response(None, ErrorCodes.PARSE_ERROR, "Parse error")

        if not isinstance(request, dict):
            return error_response(None, ErrorCodes.INVALID_REQUEST, "Invalid Request")

        try:
            return self.handle_request(request)
        except Exception as e:
            self.logger.exception(f"Unexpected error: {e}")
            return error_response(request.get("id"), ErrorCodes.INTERNAL_ERROR, "Internal error")

    def handle_request(self, request: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Dispatch a parsed request by method name."""
        method = request.get("method")

        if "id" not in request and isinstance(method, str) and method.startswith("notifications/"):
            self.logger.debug(f"Received notification: {method}")
            return None

        handler = self.handlers.get(method) if isinstance(method, str) else None
        if handler is None:
            return error_response(request.get("id"), ErrorCodes.METHOD_NOT_FOUND, "Method not found")
        return handler(request)

    def handle_initialize(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return success_response(
            request.get("id"),
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
            },
        )

    def handle_tools_list(self, request: Dict[str, Any]) -> Dict[str, Any]:
        return success_response(request.get("id"), {"tools": copy.deepcopy(TOOLS)})

    def handle_tools_call(self, request: Dict[str, Any]) -> Dict[str, Any]:
        params = request.get("params") or {}
        if not isinstance(params, dict):
            return error_response(request.get("id"), ErrorCodes.INVALID_PARAMS, "Invalid params")

        tool_name = params.get("name")
        arguments = params.get("arguments") or {}

        if tool_name != WEAVIATE_QUERY_TOOL:
            return error_response(
                request.get("id"), ErrorCodes.INVALID_PARAMS, f"Unknown tool: {tool_name}"
            )

        if not isinstance(arguments, dict):
            return error_response(request.get("id"), ErrorCodes.INVALID_PARAMS, "Invalid arguments")

        result = self.query_weaviate(arguments)
        return success_response(
            request.get("id"),
            {
                "content": [{"type": "text", "text": json.dumps(result, indent=2)}],
                "isError": not result["success"],
            },
        )

    def query_weaviate(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a semantic search described by weaviate_query tool arguments.

        Args:
            arguments: class_name, query and optional limit, where_filter, properties

        Returns:
            Normalized result with success, data or error, and the GraphQL query
        """
        graphql_query = None
        try:
            class_name = validate_name(arguments.get("class_name"), "class name")
            properties = arguments.get("properties")
            if properties is not None and not isinstance(properties, list):
                raise ValueError("properties must be an array of strings")
            if not properties:
                properties = self.client.get_class_properties(class_name)

            limit = arguments.get("limit")
            graphql_query = build_graphql_query(
                class_name,
                arguments.get("query"),
                DEFAULT_LIMIT if limit is None else limit,
                arguments.get("where_filter"),
                properties,
            )
        except (TypeError, ValueError) as e:
            self.logger.error(f"Weaviate query error: {e}")
            return {"success": False, "error": str(e), "query": graphql_query}

        self.logger.info(f"Executing GraphQL query: {graphql_query}")
        return self.client.graphql(graphql_query)


def main() -> None:
    """Start the MCP server on stdio."""
    settings = load_settings()
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    with WeaviateClient(url=settings.weaviate_url, api_key=settings.openai_api_key) as client:
        WeaviateMCPServer(client).run()


if __name__ == "__main__":
    main()
