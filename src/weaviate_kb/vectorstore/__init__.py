"""Weaviate vectorstore client and utilities."""

from .client import WeaviateClient

__all__ = ["WeaviateClient"]
