"""CLI script to populate a Weaviate knowledge base from a local file."""

import argparse
import logging
import sys
from typing import List, Optional

from ..config import DEFAULT_WEAVIATE_URL, load_settings
from ..vectorstore.client import WeaviateClient
from ..vectorstore.models import load_schema_file
from .ingestion import DEFAULT_CLASS_NAME, IngestionOptions, KnowledgeBasePopulator

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the populate command."""
    parser = argparse.ArgumentParser(
        description="Populate a Weaviate knowledge base from a JSON, CSV, text or markdown file"
    )
    parser.add_argument(
        "file_path",
        nargs="?",
        help="File to import (.json, .csv, .txt, .md)",
    )
    parser.add_argument(
        "-u",
        "--url",
        type=str,
        default=None,
        help=f"Weaviate URL (default: $WEAVIATE_URL or {DEFAULT_WEAVIATE_URL})",
    )
    parser.add_argument(
        "-c",
        "--class",
        dest="class_name",
        type=str,
        default=DEFAULT_CLASS_NAME,
        help=f"Weaviate class name (default: {DEFAULT_CLASS_NAME})",
    )
    parser.add_argument(
        "-s",
        "--chunk-size",
        type=int,
        default=None,
        help="Split text files into chunks of at most this many characters",
    )
    parser.add_argument(
        "-t",
        "--text-column",
        type=str,
        default="content",
        help="CSV column for text content (default: content)",
    )
    parser.add_argument(
        "--title-column",
        type=str,
        default="title",
        help="CSV column for title (default: title)",
    )
    parser.add_argument(
        "--schema",
        type=str,
        default=None,
        help="JSON file with a custom class schema used when the class is created",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=1,
        help="Number of concurrent document requests (default: 1)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    parser.add_argument(
        "-l",
        "--list-classes",
        action="store_true",
        help="List existing classes and exit",
    )
    parser.add_argument(
        "--count",
        dest="count_class",
        metavar="CLASS",
        type=str,
        default=None,
        help="Count documents in class and exit",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(weaviate_url=args.url)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format=LOG_FORMAT,
    )

    if args.workers < 1:
        logger.error("--workers must be at least 1")
        return 1

    client = WeaviateClient(
        url=settings.weaviate_url,
        api_key=settings.openai_api_key,
        grpc_port=settings.grpc_port,
    )

    try:
        if args.list_classes:
            client.list_classes()
            return 0

        if args.count_class:
            client.count_objects(args.count_class)
            return 0

        if not args.file_path:
            logger.error("Please specify a file path")
            parser.print_usage(sys.stderr)
            return 1

        schema = None
        if args.schema:
            try:
                schema = load_schema_file(args.schema)
            except (OSError, ValueError) as e:
                logger.error(f"Could not load schema file {args.schema}: {e}")
                return 1

        options = IngestionOptions(
            class_name=args.class_name,
            chunk_size=args.chunk_size,
            text_column=args.text_column,
            title_column=args.title_column,
            schema=schema,
        )

        logger.info("Weaviate Knowledge Base Populator")
        logger.info(f"  File: {args.file_path}")
        logger.info(f"  Class: {options.class_name}")
        logger.info(f"  Weaviate URL: {settings.weaviate_url}")

        populator = KnowledgeBasePopulator(client, max_workers=args.workers)
        report = populator.populate_from_file(args.file_path, options)

        if not report:
            logger.error("✗ Knowledge base population failed")
            return 1

        logger.info(
            f"✓ Knowledge base population completed: {report.succeeded}/{report.total} documents added"
        )
        client.count_objects(options.class_name)
        return 0

    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
