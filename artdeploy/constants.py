"""
artdeploy Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Supported Platforms
PLATFORM_LINUX = "Linux"
PLATFORM_DARWIN = "Darwin"

# Default Data Directories
DEFAULT_LINUX_DATA_DIR = "/data"
DEFAULT_DARWIN_DATA_DIR = "~/.artifactory"

# Remote Artifacts
POSTGRESQL_JAR = "postgresql-9.4.1212.jar"
DEFAULT_DRIVER_URL = f"https://jdbc.postgresql.org/download/{POSTGRESQL_JAR}"
DEFAULT_COMPOSE_URL = (
    "https://raw.githubusercontent.com/JFrogDev/artifactory-docker-examples/"
    "master/docker-compose/artifactory/artifactory-pro.yml"
)
DEFAULT_DOWNLOAD_TIMEOUT = 60
DOWNLOAD_CHUNK_SIZE = 64 * 1024

# Orchestration Backend
DEFAULT_COMPOSE_BIN = "docker-compose"
DEFAULT_COMPOSE_FILE = "artifactory-pro.yml"

# Log Configuration
DEFAULT_LOG_DIR = "logs"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Settings Environment Variables
ENV_COMPOSE_BIN = "ARTDEPLOY_COMPOSE_BIN"
ENV_COMPOSE_FILE = "ARTDEPLOY_COMPOSE_FILE"
ENV_COMPOSE_URL = "ARTDEPLOY_COMPOSE_URL"
ENV_DRIVER_URL = "ARTDEPLOY_DRIVER_URL"
ENV_LOG_DIR = "ARTDEPLOY_LOG_DIR"
ENV_DOWNLOAD_TIMEOUT = "ARTDEPLOY_DOWNLOAD_TIMEOUT"

# Secret Configuration
SECRET_FILENAME = ".dbpassword"
SECRET_SENTINEL_FILENAME = ".dbpasswordcreated"
SECRET_LENGTH = 32
SECRET_FILE_PERMISSIONS = 0o600

# Data Directory Layout (relative to the data directory)
DATA_SUBDIRECTORIES = [
    ("postgresql",),
    ("artifactory", "etc"),
    ("nginx", "conf.d"),
    ("nginx", "log"),
    ("nginx", "ssl"),
]

# Reverse Proxy
PROXY_CONFIG_DIR = ("nginx", "conf.d")
PROXY_CONFIG_FILENAME = "artifactory.conf"
PROXY_BACKEND_URL = "http://artifactory:8081/artifactory/"

# Container mount targets -> host subpath under the data directory
VOLUME_TARGETS = {
    "/var/lib/postgresql/data": ("postgresql",),
    "/var/opt/jfrog/artifactory": ("artifactory",),
    "/var/opt/jfrog/nginx": ("nginx",),
    "/etc/nginx/conf.d": ("nginx", "conf.d"),
    "/var/log/nginx": ("nginx", "log"),
    "/etc/nginx/ssl": ("nginx", "ssl"),
}

# Environment keys carrying the database password
CREDENTIAL_KEYS = ["POSTGRES_PASSWORD", "DB_PASSWORD"]

# Success Messages
SUCCESS_STARTED = "Artifactory is starting"
