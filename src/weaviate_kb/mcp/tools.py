"""Static tool descriptors advertised by the MCP bridge."""

WEAVIATE_QUERY_TOOL = "weaviate_query"

TOOLS = [
    {
        "name": WEAVIATE_QUERY_TOOL,
        "description": (
            "Query data from Weaviate vector database using GraphQL. "
            "Supports semantic search, hybrid search, and filtering."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "class_name": {
                    "type": "string",
                    "description": "The name of the Weaviate class to query",
                },
                "query": {
                    "type": "string",
                    "description": "The search query text for semantic search",
                },
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of results to return (default: 10)",
                    "default": 10,
                },
                "where_filter": {
                    "type": "object",
                    "description": "Optional where filter for precise filtering",
                    "properties": {
                        "path": {"type": "string"},
                        "operator": {"type": "string"},
                        "valueText": {"type": "string"},
                    },
                },
                "properties": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of properties to return (default: all)",
                },
            },
            "required": ["class_name", "query"],
        },
    }
]
