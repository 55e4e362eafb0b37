"""Pytest configuration and fixtures."""

import boto3
import pytest
from botocore.config import Config as BotoConfig
from botocore.stub import Stubber
from fastapi.testclient import TestClient

from brev.config import Settings
from brev.main import create_app
from brev.store import LinkStore


@pytest.fixture
def database_url(tmp_path):
    """SQLite file database, fresh for every test."""
    return f"sqlite:///{tmp_path / 'brev-test.db'}"


@pytest.fixture
def store(database_url):
    """Initialized link store with the schema in place."""
    link_store = LinkStore(database_url)
    link_store.init()
    link_store.create_schema()

    yield link_store

    link_store.close()


@pytest.fixture
def settings(database_url):
    return Settings(_env_file=None, DATABASE_URL=database_url, LOG_LEVEL="DEBUG")


@pytest.fixture
def client(settings):
    """Test client with the lifespan (store init/close) running."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=BotoConfig(signature_version="s3v4"),
    )


@pytest.fixture
def s3_stub(s3_client):
    with Stubber(s3_client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
