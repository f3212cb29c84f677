"""Knowledge base ingestion: load JSON, CSV and text files and store them as Weaviate objects."""

import csv
import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, Iterable, List, Optional

from ..dataloader.chunking.words import WordChunkingStrategy
from ..vectorstore.client import WeaviateClient
from ..vectorstore.models import create_class_schema

DEFAULT_CLASS_NAME = "Document"

SUPPORTED_EXTENSIONS = (".json", ".csv", ".txt", ".md")


@dataclass
class IngestionOptions:
    """Options controlling how a file is mapped onto documents."""
    class_name: str = DEFAULT_CLASS_NAME
    chunk_size: Optional[int] = None
    text_column: str = "content"
    title_column: str = "title"
    schema: Optional[Dict[str, Any]] = None


@dataclass
class IngestionReport:
    """Outcome of a file import.

    ok is False only when the import was aborted before or while writing;
    individual document failures are counted but do not clear it.
    """
    ok: bool
    total: int = 0
    succeeded: int = 0

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def __bool__(self) -> bool:
        return self.ok


class KnowledgeBasePopulator:
    """Pipeline for loading local files and storing their documents in a Weaviate class."""

    def __init__(
        self,
        vectorstore_client: WeaviateClient,
        logger: Optional[logging.Logger] = None,
        max_workers: int = 1,
    ):
        """
        Initialize with vectorstore client.

        Args:
            vectorstore_client: Client used for schema and object requests
            logger: Logger for progress reporting, module logger by default
            max_workers: Number of concurrent object-creation requests
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self.vectorstore_client = vectorstore_client
        self.logger = logger or logging.getLogger(__name__)
        self.max_workers = max_workers

    def populate_from_file(
        self, file_path: str, options: Optional[IngestionOptions] = None
    ) -> IngestionReport:
        """Import a file, dispatching on its extension."""
        options = options or IngestionOptions()

        if not os.path.isfile(file_path):
            self.logger.error(f"File not found: {file_path}")
            return IngestionReport(ok=False)

        extension = os.path.splitext(file_path)[1].lower()
        if extension == ".json":
            return self.populate_from_json(file_path, options)
        if extension == ".csv":
            return self.populate_from_csv(file_path, options)
        if extension in (".txt", ".md"):
            return self.populate_from_text(file_path, options)

        self.logger.error(
            f"Unsupported file format: {extension or file_path} "
            f"(supported: {', '.join(SUPPORTED_EXTENSIONS)})"
        )
        return IngestionReport(ok=False)

    def populate_from_json(
        self, file_path: str, options: Optional[IngestionOptions] = None
    ) -> IngestionReport:
        """Import a JSON file holding one object or an array of objects."""
        options = options or IngestionOptions()
        self.logger.info(f"Loading documents from JSON file: {file_path}")

        try:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self.logger.error(f"JSON parsing error: {e}")
            return IngestionReport(ok=False)
        except (OSError, ValueError) as e:
            self.logger.error(f"Error processing JSON file: {e}")
            return IngestionReport(ok=False)

        documents = data if isinstance(data, list) else [data]
        return self._import_documents(options, documents, label="Document")

    def populate_from_csv(
        self, file_path: str, options: Optional[IngestionOptions] = None
    ) -> IngestionReport:
        """Import a CSV file, one document per data row."""
        options = options or IngestionOptions()
        self.logger.info(f"Loading documents from CSV file: {file_path}")

        try:
            with open(file_path, encoding="utf-8", newline="") as f:
                documents = [
                    self._row_to_document(row, options) for row in csv.DictReader(f)
                ]
        except (OSError, ValueError, csv.Error) as e:
            self.logger.error(f"Error processing CSV file: {e}")
            return IngestionReport(ok=False)

        return self._import_documents(options, documents, label="Document")

    def populate_from_text(
        self, file_path: str, options: Optional[IngestionOptions] = None
    ) -> IngestionReport:
        """Import a text or markdown file, optionally split into word-bounded chunks."""
        options = options or IngestionOptions()
        self.logger.info(f"Loading document from text file: {file_path}")
        basename = os.path.basename(file_path)

        try:
            with open(file_path, encoding="utf-8") as f:
                content = f.read()

            if options.chunk_size is not None:
                strategy = WordChunkingStrategy(chunk_size=options.chunk_size)
                documents = [
                    {
                        "title": f"{basename} - Part {chunk.metadata.chunk_index}",
                        "content": chunk.text,
                        "source_file": chunk.metadata.source_file,
                        "chunk_index": chunk.metadata.chunk_index,
                    }
                    for chunk in strategy.chunk_document(content, source_file=file_path)
                ]
                label = "Chunk"
            else:
                documents = [
                    {"title": basename, "content": content, "source_file": file_path}
                ]
                label = "Document"
        except (OSError, ValueError) as e:
            self.logger.error(f"Error processing text file: {e}")
            return IngestionReport(ok=False)

        return self._import_documents(options, documents, label=label)

    def ensure_class_exists(
        self, class_name: str, schema: Optional[Dict[str, Any]] = None
    ) -> bool:
        """Create the class with the given or default schema unless it already exists."""
        if self.vectorstore_client.class_exists(class_name):
            self.logger.info(f"Class '{class_name}' already exists")
            return True

        self.logger.info(f"Creating class '{class_name}'")
        return self.vectorstore_client.create_class(schema or create_class_schema(class_name))

    def _row_to_document(
        self, row: Dict[Optional[str], Any], options: IngestionOptions
    ) -> Dict[str, Any]:
        # DictReader stores surplus fields under the None key
        document = {key: value for key, value in row.items() if key is not None}

        if document.get(options.text_column):
            document["content"] = document[options.text_column]
        if document.get(options.title_column):
            document["title"] = document[options.title_column]
        return document

    def _import_documents(
        self, options: IngestionOptions, documents: List[Any], label: str
    ) -> IngestionReport:
        """Ensure the target class exists, then create each document independently."""
        class_name = options.class_name or DEFAULT_CLASS_NAME

        if not self.ensure_class_exists(class_name, options.schema):
            self.logger.error(f"Could not ensure class '{class_name}' exists, aborting import")
            return IngestionReport(ok=False, total=len(documents))

        total = len(documents)
        success_count = 0

        for index, created in enumerate(self._create_all(class_name, documents), start=1):
            if created:
                success_count += 1
                self.logger.info(f"{label} {index}/{total} added successfully")
            else:
                self.logger.error(f"Failed to add {label.lower()} {index}/{total}")

        self.logger.info(f"Successfully added {success_count}/{total} {label.lower()}s")
        return IngestionReport(ok=True, total=total, succeeded=success_count)

    def _create_all(self, class_name: str, documents: List[Any]) -> Iterable[bool]:
        create = partial(self._create_document, class_name)

        if self.max_workers == 1 or len(documents) < 2:
            return map(create, documents)

        # map keeps input order, so progress is still reported in sequence
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(create, documents))

    def _create_document(self, class_name: str, document: Any) -> bool:
        if not isinstance(document, dict):
            self.logger.error(f"Skipping non-object document: {document!r}")
            return False
        return self.vectorstore_client.create_object(class_name, document)
