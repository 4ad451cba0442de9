import subprocess

import pytest

from scripts import backup

DB = {"host": "localhost", "port": 3306, "user": "root", "password": "", "database": "period_attendance"}


def test_empty_password_omits_password_flag():
    cmd = backup.mysqldump_command(DB)

    assert not any(arg.startswith("-p") for arg in cmd)
    assert cmd[-1] == "period_attendance"


def test_password_is_passed_when_set():
    cmd = backup.mysqldump_command({**DB, "password": "s3cret"})

    assert "-ps3cret" in cmd


def test_failed_dump_removes_partial_file(tmp_path, monkeypatch):
    def fake_run(cmd, stdout, stderr, check):
        stdout.write(b"-- partial dump\n")
        raise subprocess.CalledProcessError(2, cmd, stderr=b"Access denied")

    monkeypatch.setattr(backup.subprocess, "run", fake_run)
    out_file = tmp_path / "period_attendance.sql"

    with pytest.raises(SystemExit):
        backup.dump(DB, out_file)

    assert not out_file.exists()


def test_successful_dump_keeps_file(tmp_path, monkeypatch):
    def fake_run(cmd, stdout, stderr, check):
        stdout.write(b"CREATE TABLE people (id INT);\n")

    monkeypatch.setattr(backup.subprocess, "run", fake_run)

    out_file = backup.dump(DB, tmp_path / "ok.sql")

    assert out_file.read_bytes().startswith(b"CREATE TABLE")
