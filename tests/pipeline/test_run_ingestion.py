"""Tests for the populate CLI."""

import json
from unittest.mock import patch

import pytest

from weaviate_kb.config import Settings
from weaviate_kb.pipeline.ingestion import IngestionOptions, IngestionReport
from weaviate_kb.pipeline.run_ingestion import main

MODULE = "weaviate_kb.pipeline.run_ingestion"


@pytest.fixture
def settings():
    with patch(f"{MODULE}.load_settings", return_value=Settings()) as mock_load:
        yield mock_load


@pytest.fixture
def mock_client(settings):
    with patch(f"{MODULE}.WeaviateClient") as mock_client_class:
        yield mock_client_class.return_value


@pytest.fixture
def mock_populator(mock_client):
    with patch(f"{MODULE}.KnowledgeBasePopulator") as mock_populator_class:
        yield mock_populator_class


class TestMain:
    """Tests for the CLI entry point."""

    def test_missing_file_argument_fails(self, mock_client):
        """Test that running without a file path exits with 1."""
        assert main([]) == 1
        mock_client.close.assert_called_once()

    def test_list_classes(self, mock_client):
        """Test that --list-classes lists and exits successfully."""
        assert main(["--list-classes"]) == 0
        mock_client.list_classes.assert_called_once()

    def test_count(self, mock_client):
        """Test that --count counts the given class and exits successfully."""
        assert main(["--count", "Article"]) == 0
        mock_client.count_objects.assert_called_once_with("Article")

    def test_successful_import(self, mock_client, mock_populator, tmp_path):
        """Test that a successful import exits 0 and reports the class count."""
        mock_populator.return_value.populate_from_file.return_value = IngestionReport(
            ok=True, total=2, succeeded=2
        )
        path = str(tmp_path / "docs.csv")

        exit_code = main(
            [path, "-c", "Article", "-s", "500", "-t", "body", "--title-column", "headline", "-w", "3"]
        )

        assert exit_code == 0
        mock_populator.assert_called_once_with(mock_client, max_workers=3)
        mock_populator.return_value.populate_from_file.assert_called_once_with(
            path,
            IngestionOptions(
                class_name="Article",
                chunk_size=500,
                text_column="body",
                title_column="headline",
                schema=None,
            ),
        )
        mock_client.count_objects.assert_called_once_with("Article")
        mock_client.close.assert_called_once()

    def test_failed_import(self, mock_client, mock_populator):
        """Test that an aborted import exits 1."""
        mock_populator.return_value.populate_from_file.return_value = IngestionReport(ok=False)

        assert main(["missing.json"]) == 1
        mock_client.count_objects.assert_not_called()
        mock_client.close.assert_called_once()

    def test_custom_schema_file(self, mock_client, mock_populator, tmp_path):
        """Test that --schema loads the schema into the import options."""
        schema = {"class": "Article", "properties": []}
        schema_path = tmp_path / "schema.json"
        schema_path.write_text(json.dumps(schema))
        mock_populator.return_value.populate_from_file.return_value = IngestionReport(ok=True)

        assert main(["docs.json", "--schema", str(schema_path)]) == 0

        options = mock_populator.return_value.populate_from_file.call_args.args[1]
        assert options.schema == schema

    def test_unreadable_schema_file(self, mock_client, mock_populator, tmp_path):
        """Test that a missing schema file exits 1 before importing."""
        assert main(["docs.json", "--schema", str(tmp_path / "missing.json")]) == 1
        mock_populator.assert_not_called()

    def test_invalid_worker_count(self, mock_client):
        """Test that fewer than one worker is rejected."""
        assert main(["docs.json", "--workers", "0"]) == 1

    def test_url_option_passed_to_settings(self, settings, mock_client):
        """Test that --url overrides the configured Weaviate URL."""
        main(["--list-classes", "--url", "http://other:9090"])

        settings.assert_called_once_with(weaviate_url="http://other:9090")

    def test_client_built_from_settings(self, settings):
        """Test that the client gets URL, key and gRPC port from the settings."""
        settings.return_value = Settings(
            weaviate_url="http://db:8080", openai_api_key="sk-test", grpc_port=6000
        )

        with patch(f"{MODULE}.WeaviateClient") as mock_client_class:
            main(["--count", "Article"])

        mock_client_class.assert_called_once_with(
            url="http://db:8080", api_key="sk-test", grpc_port=6000
        )
