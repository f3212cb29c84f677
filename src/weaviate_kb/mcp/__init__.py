"""Model Context Protocol bridge exposing Weaviate queries over stdio."""

from .server import WeaviateMCPServer

__all__ = ["WeaviateMCPServer"]
