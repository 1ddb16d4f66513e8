"""Tests for CLI commands."""

import json
from pathlib import Path
from unittest.mock import patch

import yaml
from typer.testing import CliRunner

from src.cli.main import app

runner = CliRunner()

K1 = "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIK1 alice@laptop"
K2 = "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIK2 bob@desktop"
K3 = "ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQK3 carol@ci"
K4 = "ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQK4"

WEB = ("deploy@web1", "/home/deploy/.ssh/authorized_keys")
DB = ("root@db1", "/root/.ssh/authorized_keys")


def _invoke(config_file: Path, transport, *args: str, quiet: bool = False):
    options = ["--config", str(config_file)] + (["--quiet"] if quiet else [])
    with patch("src.cli.main.SshTransport", return_value=transport):
        return runner.invoke(app, [*options, *args])


class TestGlobalOptions:
    def test_no_args_shows_help(self):
        """Running without arguments prints usage."""
        result = runner.invoke(app, [])
        assert "Usage" in result.output

    def test_config_is_required(self):
        """Commands need --config."""
        result = runner.invoke(app, ["push"])
        assert result.exit_code == 2

    def test_builds_ssh_transport_with_timeout(self, config_file: Path, transport):
        """--timeout reaches the ssh transport settings."""
        with patch("src.cli.main.SshTransport", return_value=transport) as transport_cls:
            runner.invoke(app, ["--config", str(config_file), "--timeout", "7", "push"])
        settings = transport_cls.call_args.args[0]
        assert settings.timeout == 7.0

    def test_non_positive_timeout_exits_2(self, config_file: Path):
        """A zero timeout is rejected before anything runs."""
        result = runner.invoke(app, ["--config", str(config_file), "--timeout", "0", "push"])
        assert result.exit_code == 2
        assert "positive" in result.output


class TestPushCommand:
    """Tests for keyfleet push."""

    def test_push_writes_every_target(self, config_file: Path, transport):
        """Push writes expanded keys to each host."""
        result = _invoke(config_file, transport, "push")

        assert result.exit_code == 0
        assert "Pushed 2" in result.output
        assert transport.files[WEB] == f"{K1}\n{K3}\n{K2}\n"
        assert transport.files[DB] == f"{K2}\n"

    def test_push_missing_config_exits_1(self, tmp_path: Path, transport):
        """Push with a missing config file fails."""
        result = _invoke(tmp_path / "missing.yaml", transport, "push")
        assert result.exit_code == 1
        assert "failed to read config file" in result.output
        assert transport.calls == []

    def test_push_transport_failure_exits_1(self, config_file: Path, transport):
        """The first write failure aborts the run."""
        transport.fail_on.add(WEB)
        result = _invoke(config_file, transport, "push")
        assert result.exit_code == 1
        assert "Failed to write authorized keys" in result.output
        assert DB not in transport.files

    def test_push_strict_undefined_identity_exits_1(self, tmp_path: Path, transport):
        """--strict refuses undefined identities."""
        path = tmp_path / "fleet.yaml"
        path.write_text("hosts:\n  web1:\n    - user: deploy\n      path: /p\n      authorized_keys: ['@ghost']\n")
        result = _invoke(path, transport, "push", "--strict")
        assert result.exit_code == 1
        assert "@ghost" in result.output
        assert transport.files == {}

    def test_push_undefined_identity_without_strict(self, tmp_path: Path, transport):
        """Without --strict an undefined identity contributes no keys."""
        path = tmp_path / "fleet.yaml"
        path.write_text(
            f"hosts:\n  web1:\n    - user: deploy\n      path: /p\n      authorized_keys: ['@ghost', '{K4}']\n"
        )
        result = _invoke(path, transport, "push")
        assert result.exit_code == 0
        assert transport.files[("deploy@web1", "/p")] == f"{K4}\n"

    def test_push_warns_about_entry_without_keys(self, tmp_path: Path, transport):
        """An entry with no declared keys is flagged before it is emptied."""
        path = tmp_path / "fleet.yaml"
        path.write_text("hosts:\n  web1:\n    - user: deploy\n      path: /p\n      authorized_keys: []\n")
        result = _invoke(path, transport, "push")
        assert result.exit_code == 0
        assert "Warning:" in result.output
        assert "will be emptied" in result.output
        assert transport.files[("deploy@web1", "/p")] == ""

    def test_push_no_warning_when_keys_declared(self, config_file: Path, transport):
        """Entries that declare keys are pushed without a warning."""
        result = _invoke(config_file, transport, "push")
        assert "Warning:" not in result.output

    def test_push_rejects_multiline_key(self, tmp_path: Path, transport):
        """A key spanning several lines fails config validation and nothing is written."""
        path = tmp_path / "fleet.yaml"
        path.write_text(
            "hosts:\n  web1:\n    - user: deploy\n      path: /p\n"
            f"      authorized_keys: [\"{K4}\\nKEYFLEET_EOF\\ntouch /tmp/x\"]\n"
        )
        result = _invoke(path, transport, "push")
        assert result.exit_code == 1
        assert transport.files == {}


class TestPullCommand:
    """Tests for keyfleet pull."""

    def test_pull_rewrites_config(self, config_file: Path, transport):
        """Pull stores compacted remote keys in the config file."""
        transport.files[WEB] = f"{K1}\n{K3}\n{K4}\n"
        transport.files[DB] = f"{K2}\n"

        result = _invoke(config_file, transport, "pull")

        assert result.exit_code == 0
        assert "Pulled 2" in result.output
        data = yaml.safe_load(config_file.read_text())
        assert data["hosts"]["web1"][0]["authorized_keys"] == ["@alice", K4]
        assert data["hosts"]["db1"][0]["authorized_keys"] == ["@bob"]
        assert data["identities"] == {"alice": [K1, K3], "bob": [K2]}

    def test_pull_read_failure_leaves_config_untouched(self, config_file: Path, transport):
        """A failed read does not rewrite the config."""
        before = config_file.read_text()
        transport.files[WEB] = f"{K1}\n"

        result = _invoke(config_file, transport, "pull")

        assert result.exit_code == 1
        assert "Failed to read authorized keys" in result.output
        assert config_file.read_text() == before

    def test_pull_malformed_remote_file_exits_1(self, config_file: Path, transport):
        """A remote line that is not a key aborts the pull."""
        transport.files[WEB] = "garbage\n"
        result = _invoke(config_file, transport, "pull")
        assert result.exit_code == 1
        assert "malformed" in result.output


class TestAuditCommand:
    """Tests for keyfleet audit."""

    def test_audit_ok(self, config_file: Path, transport):
        """Matching hosts exit 0."""
        transport.files[WEB] = f"{K2}\n{K3}\n{K1} other comment\n"
        transport.files[DB] = f"{K2}\n"

        result = _invoke(config_file, transport, "audit")

        assert result.exit_code == 0
        assert "no drift found" in result.output
        assert all(call[0] == "read" for call in transport.calls)

    def test_audit_reports_unknown_and_missing(self, config_file: Path, transport):
        """Mismatch prints every unknown and missing key then exits 1."""
        transport.files[WEB] = f"{K1}\n{K2}\n{K4}\n"
        transport.files[DB] = f"{K2}\n"

        result = _invoke(config_file, transport, "audit")

        assert result.exit_code == 1
        assert f"found unknown key {K4}" in result.output
        assert f"found missing key {K3}" in result.output
        assert "audit failed for" in result.output
        assert [c[1] for c in transport.calls] == ["deploy@web1"]

    def test_audit_keep_going(self, config_file: Path, transport):
        """--keep-going audits every target before failing."""
        transport.files[WEB] = f"{K4}\n"
        transport.files[DB] = ""

        result = _invoke(config_file, transport, "audit", "--keep-going")

        assert result.exit_code == 1
        assert f"found missing key {K2}" in result.output
        assert [c[1] for c in transport.calls] == ["deploy@web1", "root@db1"]

    def test_audit_json_output(self, config_file: Path, transport):
        """--json prints per-target results."""
        transport.files[WEB] = f"{K1}\n{K2}\n{K3}\n"
        transport.files[DB] = f"{K2}\n"

        result = _invoke(config_file, transport, "audit", "--json", quiet=True)

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "ok"
        assert [t["host"] for t in data["targets"]] == ["web1", "db1"]
        assert data["targets"][0]["unknown"] == []

    def test_audit_transport_failure_exits_1(self, config_file: Path, transport):
        """Unreachable hosts fail the audit."""
        result = _invoke(config_file, transport, "audit")
        assert result.exit_code == 1
        assert "Failed to read authorized keys" in result.output
