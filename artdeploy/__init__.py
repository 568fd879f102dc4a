"""artdeploy - Deploy Artifactory with docker-compose"""

__version__ = "1.0.0"
