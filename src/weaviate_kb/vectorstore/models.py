"""Data models and schema definitions for Weaviate integration."""

import copy
import json
from pathlib import Path
from typing import Dict, Any, Union

from weaviate.classes.config import DataType

DEFAULT_VECTORIZER = "text2vec-openai"

# Standard schema for knowledge base collections
DEFAULT_SCHEMA_TEMPLATE = {
    "vectorizer": DEFAULT_VECTORIZER,
    "moduleConfig": {
        DEFAULT_VECTORIZER: {
            "model": "ada",
            "type": "text"
        }
    },
    "properties": [
        {
            "name": "title",
            "dataType": [DataType.TEXT.value],
            "description": "Title of the document"
        },
        {
            "name": "content",
            "dataType": [DataType.TEXT.value],
            "description": "Main content of the document"
        },
        {
            "name": "source_file",
            "dataType": [DataType.TEXT.value],
            "description": "Source file path"
        },
        {
            "name": "category",
            "dataType": [DataType.TEXT.value],
            "description": "Category or tag for the document"
        },
        {
            "name": "author",
            "dataType": [DataType.TEXT.value],
            "description": "Author of the document"
        },
        {
            "name": "created_at",
            "dataType": [DataType.DATE.value],
            "description": "Creation date"
        },
        {
            "name": "chunk_index",
            "dataType": [DataType.INT.value],
            "description": "Chunk index for split documents"
        }
    ]
}


def create_class_schema(class_name: str) -> Dict[str, Any]:
    """Create a class schema with the given name."""
    if not class_name:
        raise ValueError("Class name must not be empty")

    schema = copy.deepcopy(DEFAULT_SCHEMA_TEMPLATE)
    schema["class"] = class_name
    schema["description"] = f"Knowledge base documents for class {class_name}"
    return schema


def load_schema_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a custom class schema from a JSON file.

    Raises:
        ValueError: If the file does not contain a JSON object
    """
    with open(path, encoding="utf-8") as f:
        schema = json.load(f)

    if not isinstance(schema, dict):
        raise ValueError(f"Schema file {path} must contain a JSON object")
    return schema
