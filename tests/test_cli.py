"""Tests for the agentkit command line."""

import pytest

from agentkit.cli import build_parser, main

from conftest import snapshot, write_files


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("AGENTKIT_SOURCE_DIR", "AGENTKIT_LOG_LEVEL", "AGENTKIT_NO_COLOR"):
        monkeypatch.delenv(name, raising=False)


class TestParser:
    def test_target_is_optional(self):
        args = build_parser().parse_args([])
        assert args.target is None
        assert args.yes is False

    def test_rejects_two_targets(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a", "b"])


class TestMain:
    def test_success(self, bundle, target, capsys):
        code = main([str(target), "--source", str(bundle), "--yes"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Agent Starter Kit Bootstrap Installer" in out
        assert "Installed: .github/copilot-instructions.md" in out
        assert "Next Steps:" in out
        assert (target / "docs/ISSUES.md").is_file()

    def test_no_color_when_not_a_tty(self, bundle, target, capsys):
        main([str(target), "--source", str(bundle), "--yes"])
        assert "\033[" not in capsys.readouterr().out

    def test_default_target_is_cwd(self, bundle, target, monkeypatch):
        monkeypatch.chdir(target)
        assert main(["--source", str(bundle)]) == 0
        assert (target / ".github/copilot-instructions.md").is_file()

    def test_source_from_environment(self, bundle, target, monkeypatch):
        monkeypatch.setenv("AGENTKIT_SOURCE_DIR", str(bundle))
        assert main([str(target)]) == 0
        assert (target / ".github/agents/orchestrator.md").is_file()

    def test_bundled_kit(self, target):
        assert main([str(target)]) == 0
        assert (target / ".github/agents/orchestrator.md").is_file()
        assert (target / "examples/python-api/SKILL.md").is_file()

    def test_missing_target(self, bundle, tmp_path, capsys):
        missing = tmp_path / "nowhere"
        code = main([str(missing), "--source", str(bundle)])
        out = capsys.readouterr().out
        assert code == 2
        assert "Target directory does not exist" in out
        assert "Traceback" not in out
        assert not missing.exists()

    def test_declined_prompt(self, bundle, target, monkeypatch, capsys):
        write_files(target, {".github/copilot-instructions.md": "# Mine\n"})
        before = snapshot(target)
        monkeypatch.setattr("builtins.input", lambda _: "")

        code = main([str(target), "--source", str(bundle)])

        assert code == 3
        assert "Installation cancelled by user" in capsys.readouterr().out
        assert snapshot(target) == before

    def test_accepted_prompt(self, bundle, target, monkeypatch):
        write_files(target, {".github/copilot-instructions.md": "# Mine\n"})
        monkeypatch.setattr("builtins.input", lambda _: "y")
        assert main([str(target), "--source", str(bundle)]) == 0
        assert (target / ".github/copilot-instructions.md").read_text() == "# Instructions\n"

    def test_missing_required_source(self, bundle, target, capsys):
        (bundle / "docs/skills/_template/SKILL.md").unlink()
        code = main([str(target), "--source", str(bundle)])
        assert code == 4
        assert "Source file not found: docs/skills/_template/SKILL.md" in capsys.readouterr().out

    def test_invalid_bundle_manifest(self, bundle, target):
        write_files(bundle, {"agentkit.json": "{}"})
        assert main([str(target), "--source", str(bundle)]) == 5

    def test_interrupt(self, bundle, target, monkeypatch):
        write_files(target, {".github/copilot-instructions.md": "# Mine\n"})

        def interrupted(_):
            raise KeyboardInterrupt

        monkeypatch.setattr("builtins.input", interrupted)
        assert main([str(target), "--source", str(bundle)]) == 130

    def test_unwritable_layout_is_one_line(self, bundle, target, capsys):
        write_files(target, {"examples": "a file where a directory belongs\n"})
        code = main([str(target), "--source", str(bundle), "--yes"])
        out = capsys.readouterr().out
        assert code == 6
        assert "Traceback" not in out
        errors = [line for line in out.splitlines() if line.startswith("✗")]
        assert errors == [f"✗ Could not write {target.resolve() / 'examples'}: File exists"]

    def test_invalid_settings(self, bundle, target, monkeypatch, capsys):
        monkeypatch.setenv("AGENTKIT_NO_COLOR", "sometimes")
        code = main([str(target), "--source", str(bundle)])
        out = capsys.readouterr().out
        assert code == 7
        assert "Invalid AGENTKIT_* settings" in out
        assert "Traceback" not in out
        assert not (target / ".github").exists()

    def test_undecodable_bundle_manifest(self, bundle, target, capsys):
        (bundle / "agentkit.json").write_bytes(b"\xff\xfe{not utf-8")
        code = main([str(target), "--source", str(bundle)])
        out = capsys.readouterr().out
        assert code == 5
        assert "Invalid manifest" in out
        assert "Traceback" not in out
