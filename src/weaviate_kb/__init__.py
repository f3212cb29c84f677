"""Knowledge base ingestion and MCP query bridge for Weaviate."""

__version__ = "1.0.0"
