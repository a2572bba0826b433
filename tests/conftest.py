"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import MagicMock

import pytest

# Keep ambient Docker/log settings from leaking into unit tests
for _var in ("DOCKER_BASE_URL", "DOCKER_STOP_TIMEOUT", "DOCKER_REMOVE_ON_START_FAILURE", "LOG_FILE"):
    os.environ.pop(_var, None)

from dockhand.config import Settings
from dockhand.models import ContainerInfo, CreatedContainer, ImageSummary
from dockhand.services.container import EngineClient, PullStream, Session


@pytest.fixture
def test_settings():
    """Settings with the default lifecycle policy."""
    return Settings(
        docker_base_url="unix:///var/run/docker.sock",
        docker_stop_timeout=None,
        docker_remove_on_start_failure=True,
    )


@pytest.fixture
def pull_stream():
    """Mock pull stream yielding a short, successful progress sequence."""
    stream = MagicMock(spec=PullStream)
    stream.__iter__.return_value = iter(
        [
            {"status": "Pulling from library/imagePath", "id": "latest"},
            {"status": "Download complete", "id": "a3ed95caeb02"},
            {"status": "Status: Downloaded newer image for imagePath:latest"},
        ]
    )
    return stream


@pytest.fixture
def mock_engine(pull_stream):
    """Mock engine client where every step succeeds and the image is present."""
    engine = MagicMock(spec=EngineClient)

    engine.list_images.return_value = [
        ImageSummary(id="sha256:3f57d9401f8d", repo_tags=["imagePath:latest"])
    ]
    engine.pull_image.return_value = pull_stream
    engine.create_container.return_value = CreatedContainer(id="aContainerId")
    engine.start_container.return_value = None
    engine.inspect_container.return_value = ContainerInfo(id="aContainerId")
    engine.stop_container.return_value = None
    engine.remove_container.return_value = None

    return engine


@pytest.fixture
def mock_engine_without_image(mock_engine):
    """Mock engine client whose image list query finds nothing."""
    mock_engine.list_images.return_value = []
    return mock_engine


@pytest.fixture
def session(mock_engine, test_settings):
    """Session bound to the mock engine client."""
    return Session(mock_engine, settings=test_settings)


@pytest.fixture
def call_names():
    """Return the names of engine methods called, in call order."""

    def _names(engine) -> list:
        return [name for name, _args, _kwargs in engine.method_calls]

    return _names
