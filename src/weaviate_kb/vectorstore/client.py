"""Weaviate client wrapper: REST schema and object calls, GraphQL queries and object counts."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import httpx
import weaviate
from weaviate.exceptions import WeaviateBaseError

from ..config import DEFAULT_GRPC_PORT
from .query import validate_name


class WeaviateClient:
    """Wrapper around the Weaviate HTTP API with our domain-specific operations."""

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
        grpc_port: int = DEFAULT_GRPC_PORT,
    ):
        """
        Initialize Weaviate client.

        Args:
            url: Base URL of the Weaviate instance
            api_key: OpenAI API key forwarded for the text2vec-openai vectorizer
            timeout: Request timeout in seconds, httpx default when omitted
            http_client: Preconfigured httpx client, mainly for tests
            logger: Logger used for request failures
            grpc_port: gRPC port used by the weaviate-client connection
        """
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.grpc_port = grpc_port
        self.logger = logger or logging.getLogger(__name__)

        if http_client is not None:
            self.http = http_client
        else:
            headers = {"Content-Type": "application/json"}
            if api_key:
                headers["X-OpenAI-Api-Key"] = api_key
            options: Dict[str, Any] = {"base_url": self.url, "headers": headers}
            if timeout is not None:
                options["timeout"] = timeout
            self.http = httpx.Client(**options)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.http.close()

    def class_exists(self, class_name: str) -> bool:
        """Check if class exists. Errors are logged and reported as missing."""
        try:
            response = self.http.get(f"/v1/schema/{class_name}")
        except httpx.HTTPError as e:
            self.logger.error(f"Error checking if class exists: {e}")
            return False
        return response.status_code == 200

    def create_class(self, schema: Dict[str, Any]) -> bool:
        """Create a class from a schema definition."""
        try:
            response = self.http.post("/v1/schema", json=schema)
        except httpx.HTTPError as e:
            self.logger.error(f"Error creating class: {e}")
            return False

        if response.status_code == 200:
            self.logger.info("Class created successfully")
            return True

        self.logger.error(f"Failed to create class: {response.status_code} - {response.text}")
        return False

    def create_object(self, class_name: str, properties: Dict[str, Any]) -> bool:
        """Create a single object in a class. Attempted exactly once."""
        payload = {"class": class_name, "properties": properties}
        try:
            response = self.http.post("/v1/objects", json=payload)
        except httpx.HTTPError as e:
            self.logger.error(f"Error creating document: {e}")
            return False

        if response.status_code in (200, 201):
            return True

        self.logger.error(f"Failed to create document: {response.status_code} - {response.text}")
        return False

    def list_classes(self) -> List[Dict[str, Any]]:
        """List class definitions in the schema."""
        try:
            response = self.http.get("/v1/schema")
            if response.status_code != 200:
                self.logger.error(
                    f"Failed to list classes: {response.status_code} - {response.text}"
                )
                return []
            classes = response.json().get("classes") or []
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            self.logger.error(f"Error listing classes: {e}")
            return []

        self.logger.info(f"Found {len(classes)} classes:")
        for cls in classes:
            self.logger.info(f"  - {cls.get('class')}: {cls.get('description')}")
        return classes

    def get_class_properties(self, class_name: str) -> List[str]:
        """Return the property names declared for a class, or [] if unknown."""
        try:
            response = self.http.get(f"/v1/schema/{class_name}")
            if response.status_code != 200:
                return []
            properties = response.json().get("properties") or []
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            self.logger.error(f"Error reading class properties: {e}")
            return []

        return [prop["name"] for prop in properties if isinstance(prop, dict) and prop.get("name")]

    def graphql(self, query: str) -> Dict[str, Any]:
        """
        Execute a GraphQL query and normalize the outcome.

        Args:
            query: GraphQL query text

        Returns:
            {"success": True, "data": ..., "query": query} on success, otherwise
            {"success": False, "error": ..., "query": query}
        """
        try:
            response = self.http.post("/v1/graphql", json={"query": query})

            if response.status_code != 200:
                return {
                    "success": False,
                    "error": f"HTTP {response.status_code}: {response.reason_phrase}",
                    "query": query,
                }

            result = response.json()
            if not isinstance(result, dict):
                raise ValueError("GraphQL response is not a JSON object")

            if result.get("errors") is not None:
                return {"success": False, "error": result["errors"], "query": query}

            return {"success": True, "data": result.get("data"), "query": query}

        except (httpx.HTTPError, ValueError) as e:
            self.logger.error(f"Weaviate query error: {e}")
            return {"success": False, "error": str(e), "query": query}

    def connect_sdk(self) -> weaviate.WeaviateClient:
        """Open a weaviate-client connection to the same instance; callers close it."""
        parsed = urlparse(self.url)
        secure = parsed.scheme == "https"
        host = parsed.hostname or "localhost"
        headers = {"X-OpenAI-Api-Key": self.api_key} if self.api_key else None

        return weaviate.connect_to_custom(
            http_host=host,
            http_port=parsed.port or (443 if secure else 80),
            http_secure=secure,
            grpc_host=host,
            grpc_port=self.grpc_port,
            grpc_secure=secure,
            headers=headers,
            skip_init_checks=True,
        )

    def count_objects(self, class_name: str) -> int:
        """Get the number of objects in a class, 0 if it cannot be determined."""
        try:
            validate_name(class_name, "class name")
        except ValueError as e:
            self.logger.error(f"Error counting documents: {e}")
            return 0

        try:
            client = self.connect_sdk()
            try:
                if not client.collections.exists(class_name):
                    self.logger.warning(f"Class '{class_name}' does not exist")
                    return 0

                collection = client.collections.get(class_name)
                count = collection.aggregate.over_all(total_count=True).total_count or 0
            finally:
                client.close()
        except (WeaviateBaseError, httpx.HTTPError) as e:
            self.logger.error(f"Failed to count documents: {e}")
            return 0

        self.logger.info(f"Class '{class_name}' contains {count} documents")
        return count
