"""Shared fixtures for artdeploy tests."""

from pathlib import Path

import pytest

from artdeploy.models.deployment import Action, DeploymentConfig, PlatformInfo
from artdeploy.settings import Settings

COMPOSE_TEMPLATE = """\
version: '2'
services:
  postgresql:
    image: docker.bintray.io/postgres:9.5.2
    container_name: postgresql
    ports:
    - 5432:5432
    environment:
    - POSTGRES_DB=artifactory
    - POSTGRES_USER=artifactory
    - POSTGRES_PASSWORD=password
    volumes:
    - /data/postgresql:/var/lib/postgresql/data
    restart: always
  artifactory:
    image: docker.bintray.io/jfrog/artifactory-pro:latest
    container_name: artifactory
    depends_on:
    - postgresql
    volumes:
    - /data/artifactory:/var/opt/jfrog/artifactory
    - ./postgresql-9.4.1212.jar:/opt/jfrog/artifactory/tomcat/lib/postgresql-9.4.1212.jar
    environment:
    - DB_TYPE=postgresql
    - DB_USER=artifactory
    - DB_PASSWORD=password
    restart: always
  nginx:
    image: docker.bintray.io/jfrog/nginx-artifactory-pro:latest
    container_name: nginx
    ports:
    - 80:80
    - 443:443
    depends_on:
    - artifactory
    volumes:
    - /data/nginx:/var/opt/jfrog/nginx
    - /data/nginx/conf.d:/etc/nginx/conf.d
    environment:
    - ART_BASE_URL=http://artifactory:8081/artifactory
    restart: always
"""

DRIVER_BYTES = b"PK\x03\x04 fake jdbc driver"


class FakeFetcher:
    """Stands in for FetchService: writes canned content, records URLs."""

    def __init__(self, template: str = COMPOSE_TEMPLATE):
        self.template = template
        self.calls = []

    def fetch(self, url: str, destination: Path) -> bool:
        self.calls.append(url)
        if destination.exists():
            return False
        destination.parent.mkdir(parents=True, exist_ok=True)
        if destination.suffix == ".jar":
            destination.write_bytes(DRIVER_BYTES)
        else:
            destination.write_text(self.template)
        return True


@pytest.fixture
def settings(tmp_path):
    return Settings(
        compose_file=tmp_path / "artifactory-pro.yml",
        compose_url="https://example.test/artifactory-pro.yml",
        driver_url="https://example.test/download/postgresql-9.4.1212.jar",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "x"


@pytest.fixture
def darwin_info(tmp_path):
    return PlatformInfo(
        family="Darwin",
        default_data_dir=tmp_path / "default-data",
        requires_root=False,
    )


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def start_config(data_dir):
    return DeploymentConfig(action=Action.START, data_dir=data_dir)


@pytest.fixture
def compose_template():
    return COMPOSE_TEMPLATE
