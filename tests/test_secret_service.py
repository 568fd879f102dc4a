"""Tests for one-time database password generation."""

import os
import stat

import pytest

from artdeploy.exceptions import SecretError
from artdeploy.services.secret_service import SecretService, generate_secret


def test_generate_secret_is_deterministic_for_a_timestamp():
    assert generate_secret(1700000000) == generate_secret(1700000000)
    assert generate_secret(1700000000) != generate_secret(1700000001)


def test_generate_secret_length():
    assert len(generate_secret(1700000000)) == 32
    assert len(generate_secret(1700000000, length=12)) == 12


def test_first_run_creates_secret_and_sentinel(tmp_path):
    service = SecretService(tmp_path, clock=lambda: 1700000000.5)

    record = service.ensure()

    assert record.created is True
    assert record.value == generate_secret(1700000000)
    assert service.secret_path.read_text() == record.value
    assert service.sentinel_path.exists()


def test_secret_file_is_private(tmp_path):
    service = SecretService(tmp_path, clock=lambda: 1700000000)
    service.ensure()

    mode = stat.S_IMODE(service.secret_path.stat().st_mode)
    assert mode == 0o600


def test_secret_file_is_never_readable_by_others(tmp_path, monkeypatch):
    service = SecretService(tmp_path, clock=lambda: 1700000000)
    modes_before_chmod = []
    real_chmod = os.chmod

    def recording_chmod(path, mode):
        modes_before_chmod.append(stat.S_IMODE(os.stat(path).st_mode))
        real_chmod(path, mode)

    monkeypatch.setattr(os, "chmod", recording_chmod)
    previous_umask = os.umask(0o022)
    try:
        service.ensure()
    finally:
        os.umask(previous_umask)

    assert modes_before_chmod == [0o600]


def test_leftover_password_file_is_tightened(tmp_path):
    service = SecretService(tmp_path, clock=lambda: 1700000000)
    service.secret_path.write_text("stale")
    service.secret_path.chmod(0o644)

    record = service.ensure()

    assert service.secret_path.read_text() == record.value
    assert stat.S_IMODE(service.secret_path.stat().st_mode) == 0o600


def test_second_run_reuses_secret(tmp_path):
    first = SecretService(tmp_path, clock=lambda: 1700000000).ensure()
    second = SecretService(tmp_path, clock=lambda: 1800000000).ensure()

    assert second.value == first.value
    assert second.created is False


def test_sentinel_governs_regeneration(tmp_path):
    service = SecretService(tmp_path, clock=lambda: 1700000000)
    service.ensure()
    service.sentinel_path.unlink()

    regenerated = SecretService(tmp_path, clock=lambda: 1800000000).ensure()

    assert regenerated.created is True
    assert regenerated.value == generate_secret(1800000000)


def test_sentinel_without_password_fails(tmp_path):
    service = SecretService(tmp_path)
    service.sentinel_path.touch()

    with pytest.raises(SecretError):
        service.ensure()


def test_empty_password_file_fails(tmp_path):
    service = SecretService(tmp_path)
    service.sentinel_path.touch()
    service.secret_path.write_text("")

    with pytest.raises(SecretError):
        service.ensure()
