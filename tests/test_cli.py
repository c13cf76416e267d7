from __future__ import annotations

import json
from pathlib import Path

import pytest

from baumeister import cli
from baumeister.cli import build_parser, main
from baumeister.config import CONFIG_FILENAME, save_config


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.replay is False
    assert args.skip_install is False
    assert args.force is False


def test_yo_rc_is_an_alias_for_replay():
    assert build_parser().parse_args(["--yo-rc"]).replay is True


def test_cli_interactive_run_creates_project(tmp_path: Path, scripted_prompter):
    prompter = scripted_prompter({"projectName": "Demo Site", "additionalInfo": False})
    exit_code = main(["--directory", str(tmp_path), "--skip-install"], prompter=prompter)

    assert exit_code == 0
    assert (tmp_path / "package.json").exists()
    config = json.loads((tmp_path / CONFIG_FILENAME).read_text(encoding="utf-8"))
    assert config["name"] == "demo-site"
    assert config["projectHomepage"] == ""


def test_cli_replay_regenerates_project(tmp_path: Path, make_context):
    save_config(make_context(projectType="spa"), tmp_path / CONFIG_FILENAME)

    exit_code = main(["--directory", str(tmp_path), "--replay", "--skip-install"])

    assert exit_code == 0
    assert (tmp_path / "src" / "index.html").exists()
    assert not (tmp_path / "src" / "index.hbs").exists()


def test_cli_replay_reads_custom_config_path(tmp_path: Path, make_context):
    config_path = tmp_path / "answers.json"
    save_config(make_context(), config_path)
    project_dir = tmp_path / "project"

    exit_code = main(
        ["-d", str(project_dir), "--replay", "--config", str(config_path), "--skip-install"]
    )

    assert exit_code == 0
    assert (project_dir / "LICENSE").exists()


def test_cli_replay_without_config_fails_without_writing(tmp_path: Path, capsys):
    exit_code = main(["--directory", str(tmp_path), "--replay", "--skip-install"])

    assert exit_code == 1
    assert list(tmp_path.iterdir()) == []
    assert "does not exist" in capsys.readouterr().err


def test_cli_replay_with_incomplete_config_fails(tmp_path: Path, capsys):
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"projectName": "Demo"}), encoding="utf-8")

    exit_code = main(["--directory", str(tmp_path), "--replay", "--skip-install"])

    assert exit_code == 1
    assert [path.name for path in tmp_path.iterdir()] == [CONFIG_FILENAME]
    assert "projectType" in capsys.readouterr().err


def test_cli_replay_with_invalid_version_fails(tmp_path: Path, make_context, capsys):
    record = make_context().to_config()
    record["initialVersion"] = "not-a-version"
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps(record), encoding="utf-8")

    exit_code = main(["--directory", str(tmp_path), "--replay", "--skip-install"])

    assert exit_code == 1
    assert [path.name for path in tmp_path.iterdir()] == [CONFIG_FILENAME]
    assert "initialVersion" in capsys.readouterr().err


def test_cli_ignores_corrupt_remembered_answers(tmp_path: Path, scripted_prompter):
    (tmp_path / CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
    prompter = scripted_prompter({"projectName": "Demo Site"})

    exit_code = main(["--directory", str(tmp_path), "--skip-install"], prompter=prompter)

    assert exit_code == 0
    assert prompter.asked[0] == "projectName"
    config = json.loads((tmp_path / CONFIG_FILENAME).read_text(encoding="utf-8"))
    assert config["name"] == "demo-site"


def test_cli_abort_during_prompting_writes_nothing(tmp_path: Path, scripted_prompter):
    class AbortingPrompter(scripted_prompter):
        def ask(self, question, default):
            if question.key == "license":
                raise KeyboardInterrupt
            return super().ask(question, default)

    exit_code = main(["--directory", str(tmp_path), "--skip-install"], prompter=AbortingPrompter())

    assert exit_code == cli.EXIT_ABORTED
    assert list(tmp_path.iterdir()) == []


def test_cli_refuses_to_overwrite_without_force(tmp_path: Path, make_context, capsys):
    save_config(make_context(), tmp_path / CONFIG_FILENAME)
    (tmp_path / "README.md").write_text("mine", encoding="utf-8")

    exit_code = main(["--directory", str(tmp_path), "--replay", "--skip-install"])

    assert exit_code == 1
    assert "already exists" in capsys.readouterr().err
    assert (tmp_path / "README.md").read_text(encoding="utf-8") == "mine"

    assert main(["--directory", str(tmp_path), "--replay", "--skip-install", "--force"]) == 0


def test_cli_installs_dependencies_unless_skipped(tmp_path: Path, make_context, monkeypatch: pytest.MonkeyPatch):
    installed = []
    monkeypatch.setattr(cli, "install_dependencies", lambda directory: installed.append(directory))
    save_config(make_context(), tmp_path / CONFIG_FILENAME)

    assert main(["--directory", str(tmp_path), "--replay"]) == 0
    assert installed == [tmp_path]
