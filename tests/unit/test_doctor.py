from __future__ import annotations

import pytest
from click.testing import CliRunner

from glsnap.commands import doctor
from glsnap.commands.doctor import CheckResult, doctor_cmd, run_doctor


def test_all_checks_pass() -> None:
    results = run_doctor()
    names = [r.name for r in results]
    assert names == ["python", "numpy", "pillow", "backend", "png-roundtrip", "workdir"]
    assert all(r.ok for r in results), results


def test_doctor_cmd_success() -> None:
    result = CliRunner().invoke(doctor_cmd, [])
    assert result.exit_code == 0
    assert "backend: software surface ok" in result.output


def test_doctor_cmd_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "glsnap.commands.doctor._check_backend",
        lambda: CheckResult("backend", False, "broken"),
    )
    result = CliRunner().invoke(doctor_cmd, [])
    assert result.exit_code == 1
    assert "backend: broken" in result.output


def test_backend_check_reports_init_error(monkeypatch: pytest.MonkeyPatch) -> None:
    from glsnap.errors import BackendInitError

    def _boom(width: int, height: int):
        raise BackendInitError("no context")

    monkeypatch.setattr(doctor, "open_surface", _boom)
    check = doctor._check_backend()
    assert check.ok is False
    assert check.detail == "no context"


def test_workdir_not_writable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(doctor.os, "access", lambda path, mode: False)
    assert doctor._check_workdir().ok is False
