"""GraphQL query construction for Weaviate nearText Get requests."""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# GraphQL identifiers; class, property and operator names are spliced unquoted
GRAPHQL_NAME = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

ADDITIONAL_FIELDS = ("id", "distance", "certainty")

DEFAULT_LIMIT = 10


def escape_graphql_string(value: Any) -> str:
    """Escape a value for use inside a double-quoted GraphQL string literal."""
    return (
        str(value)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def validate_name(name: Any, kind: str = "name") -> str:
    """Return name unchanged if it is a valid GraphQL identifier."""
    if not isinstance(name, str) or not GRAPHQL_NAME.match(name):
        raise ValueError(f"Invalid {kind}: {name!r}")
    return name


def validate_limit(limit: Any) -> int:
    """Return limit unchanged if it is an integer (booleans excluded)."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"Invalid limit: {limit!r}")
    return limit


@dataclass
class WhereFilter:
    """Single equality-style condition on one property path."""
    path: str
    operator: str
    value_text: str

    @classmethod
    def from_dict(cls, data: Any) -> Optional["WhereFilter"]:
        """Build a filter from a tool argument, or None if it is incomplete."""
        if not isinstance(data, dict):
            return None
        if not (data.get("path") and data.get("operator") and data.get("valueText")):
            return None
        if not GRAPHQL_NAME.match(str(data["operator"])):
            logger.warning(f"Ignoring where filter with invalid operator: {data['operator']!r}")
            return None
        return cls(
            path=str(data["path"]),
            operator=str(data["operator"]),
            value_text=str(data["valueText"]),
        )

    def to_graphql(self) -> str:
        return (
            f'{{ path: ["{escape_graphql_string(self.path)}"], '
            f"operator: {self.operator}, "
            f'valueText: "{escape_graphql_string(self.value_text)}" }}'
        )


@dataclass
class NearTextQuery:
    """
    Structured nearText Get query that renders to GraphQL wire text.

    Names are validated on render; only the free-text concept and the filter
    values are emitted as string literals.
    """
    class_name: str
    concept: str
    limit: int = DEFAULT_LIMIT
    where: Optional[WhereFilter] = None
    properties: List[str] = field(default_factory=list)

    def arguments(self) -> List[str]:
        args = [
            f'nearText: {{ concepts: ["{escape_graphql_string(self.concept)}"] }}',
            f"limit: {validate_limit(self.limit)}",
        ]
        if self.where is not None:
            args.append(f"where: {self.where.to_graphql()}")
        return args

    def to_graphql(self) -> str:
        class_name = validate_name(self.class_name, "class name")
        properties = [validate_name(p, "property name") for p in self.properties]

        lines = [
            "{",
            "  Get {",
            f"    {class_name}({', '.join(self.arguments())}) {{",
        ]
        if properties:
            lines.append(f"      {' '.join(properties)}")
        lines.append("      _additional {")
        lines.extend(f"        {name}" for name in ADDITIONAL_FIELDS)
        lines.extend([
            "      }",
            "    }",
            "  }",
            "}",
        ])
        return "\n".join(lines) + "\n"


def build_where_filter(where_filter: Any) -> Optional[str]:
    """
    Render a where clause for a simple equality filter.

    Args:
        where_filter: Mapping with path, operator and valueText

    Returns:
        GraphQL where clause, or None if the filter is not a complete mapping
    """
    parsed = WhereFilter.from_dict(where_filter)
    return parsed.to_graphql() if parsed else None


def build_graphql_query(
    class_name: str,
    query: Any,
    limit: int = DEFAULT_LIMIT,
    where_filter: Optional[Dict[str, Any]] = None,
    properties: Optional[List[str]] = None,
) -> str:
    """
    Build a nearText Get query for a collection.

    Args:
        class_name: Collection to query
        query: Free-text search phrase
        limit: Maximum number of results
        where_filter: Optional equality filter (path, operator, valueText)
        properties: Properties to select; only metadata is selected when empty

    Returns:
        GraphQL query string

    Raises:
        ValueError: If the class name or a property name is not a GraphQL name,
            or the limit is not an integer
    """
    return NearTextQuery(
        class_name=class_name,
        concept="" if query is None else str(query),
        limit=DEFAULT_LIMIT if limit is None else validate_limit(limit),
        where=WhereFilter.from_dict(where_filter),
        properties=list(properties or []),
    ).to_graphql()
