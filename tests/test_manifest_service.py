"""Tests for structured compose manifest patching."""

from pathlib import Path

import pytest
import yaml

from artdeploy.exceptions import PatchFailedError
from artdeploy.services.manifest_service import (
    ManifestService,
    host_path_for,
    patch_manifest,
    patch_manifest_text,
)

JAR = "postgresql-9.4.1212.jar"
DATA = Path("/srv/artifactory")


def _services(text):
    return yaml.safe_load(text)["services"]


class TestHostPathFor:
    def test_driver_jar_maps_into_data_dir(self):
        target = f"/opt/jfrog/artifactory/tomcat/lib/{JAR}"
        assert host_path_for(target, DATA, JAR) == f"/srv/artifactory/{JAR}"

    def test_known_targets(self):
        assert host_path_for("/var/lib/postgresql/data", DATA, JAR) == "/srv/artifactory/postgresql"
        assert host_path_for("/etc/nginx/conf.d/", DATA, JAR) == "/srv/artifactory/nginx/conf.d"

    def test_unknown_target_is_left_alone(self):
        assert host_path_for("/var/run/docker.sock", DATA, JAR) is None


class TestPatchManifestText:
    def test_rewrites_volumes(self, compose_template):
        services = _services(patch_manifest_text(compose_template, DATA, "s3cret", JAR))

        assert services["postgresql"]["volumes"] == ["/srv/artifactory/postgresql:/var/lib/postgresql/data"]
        assert services["artifactory"]["volumes"] == [
            "/srv/artifactory/artifactory:/var/opt/jfrog/artifactory",
            f"/srv/artifactory/{JAR}:/opt/jfrog/artifactory/tomcat/lib/{JAR}",
        ]
        assert services["nginx"]["volumes"] == [
            "/srv/artifactory/nginx:/var/opt/jfrog/nginx",
            "/srv/artifactory/nginx/conf.d:/etc/nginx/conf.d",
        ]

    def test_rewrites_credentials_only(self, compose_template):
        services = _services(patch_manifest_text(compose_template, DATA, "s3cret", JAR))

        assert "POSTGRES_PASSWORD=s3cret" in services["postgresql"]["environment"]
        assert "POSTGRES_USER=artifactory" in services["postgresql"]["environment"]
        assert "DB_PASSWORD=s3cret" in services["artifactory"]["environment"]
        assert services["nginx"]["environment"] == ["ART_BASE_URL=http://artifactory:8081/artifactory"]

    def test_keeps_other_keys_and_order(self, compose_template):
        patched = yaml.safe_load(patch_manifest_text(compose_template, DATA, "s3cret", JAR))

        assert patched["version"] == "2"
        assert list(patched["services"]) == ["postgresql", "artifactory", "nginx"]
        assert patched["services"]["nginx"]["ports"] == ["80:80", "443:443"]

    def test_same_inputs_give_same_bytes(self, compose_template):
        first = patch_manifest_text(compose_template, DATA, "s3cret", JAR)
        second = patch_manifest_text(compose_template, DATA, "s3cret", JAR)

        assert first == second

    def test_repatching_is_a_no_op(self, compose_template):
        once = patch_manifest_text(compose_template, DATA, "s3cret", JAR)
        twice = patch_manifest_text(once, DATA, "s3cret", JAR)

        assert twice == once

    def test_repatching_with_new_inputs_replaces_values(self, compose_template):
        once = patch_manifest_text(compose_template, DATA, "old", JAR)
        moved = _services(patch_manifest_text(once, Path("/data/sub"), "new", JAR))

        assert moved["postgresql"]["volumes"] == ["/data/sub/postgresql:/var/lib/postgresql/data"]
        assert "POSTGRES_PASSWORD=new" in moved["postgresql"]["environment"]

    def test_invalid_yaml_fails(self):
        with pytest.raises(PatchFailedError):
            patch_manifest_text("services: [unclosed", DATA, "s3cret", JAR)

    def test_missing_services_fails(self):
        with pytest.raises(PatchFailedError):
            patch_manifest_text("version: '2'\n", DATA, "s3cret", JAR)

    def test_untargeted_scalars_keep_their_meaning(self):
        template = (
            "services:\n"
            "  gitlab:\n"
            "    ports:\n"
            "    - 2222:22\n"
            "    - 8080\n"
            "    environment:\n"
            "      ENABLED: yes\n"
            "      LEGACY: on\n"
            "      DEBUG: true\n"
            "      RATIO: 1.5\n"
            "      POSTGRES_PASSWORD: password\n"
        )

        out = patch_manifest_text(template, DATA, "s3cret", JAR)
        service = _services(out)["gitlab"]

        assert "2222:22" in out
        assert service["ports"] == ["2222:22", 8080]
        assert service["environment"] == {
            "ENABLED": "yes",
            "LEGACY": "on",
            "DEBUG": True,
            "RATIO": 1.5,
            "POSTGRES_PASSWORD": "s3cret",
        }


class TestPatchManifestStructures:
    def test_long_volume_syntax_and_mapping_environment(self):
        document = {
            "services": {
                "postgresql": {
                    "volumes": [
                        {"type": "bind", "source": "/data/postgresql", "target": "/var/lib/postgresql/data"},
                        {"type": "volume", "source": "cache", "target": "/cache"},
                    ],
                    "environment": {"POSTGRES_PASSWORD": "password", "POSTGRES_DB": "artifactory"},
                }
            }
        }

        patched = patch_manifest(document, DATA, "s3cret", JAR)
        service = patched["services"]["postgresql"]

        assert service["volumes"][0]["source"] == "/srv/artifactory/postgresql"
        assert service["volumes"][1] == {"type": "volume", "source": "cache", "target": "/cache"}
        assert service["environment"] == {"POSTGRES_PASSWORD": "s3cret", "POSTGRES_DB": "artifactory"}

    def test_input_document_is_not_mutated(self):
        document = {"services": {"db": {"environment": ["DB_PASSWORD=password"]}}}

        patch_manifest(document, DATA, "s3cret", JAR)

        assert document["services"]["db"]["environment"] == ["DB_PASSWORD=password"]


class TestManifestService:
    def test_patch_rewrites_file(self, tmp_path, compose_template):
        manifest = tmp_path / "artifactory-pro.yml"
        manifest.write_text(compose_template)

        ManifestService(manifest).patch(DATA, "s3cret", JAR)

        assert "POSTGRES_PASSWORD=s3cret" in manifest.read_text()

    def test_missing_file_fails(self, tmp_path):
        with pytest.raises(PatchFailedError):
            ManifestService(tmp_path / "missing.yml").patch(DATA, "s3cret", JAR)
