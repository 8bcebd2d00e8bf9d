"""End-to-end tests of the staging-deploy command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml
from click.testing import CliRunner

from staging_deploy.cli.main import cli
from staging_deploy.cli.utils import output


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Stop rich from wrapping long paths in captured output."""
    monkeypatch.setattr(output.console, "width", 400)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Project directory with a config file and a staging server."""
    server = tmp_path / "server"
    server.mkdir()
    (server / "profiles.yaml").write_text(yaml.safe_dump({
        "profiles": [
            {"id": "release-profile", "name": "Releases", "match": {"group": ["com.example"]}},
            {"id": "other", "match": {"group": ["org.other"]}},
        ]
    }))

    (tmp_path / ".staging-deploy.yaml").write_text(yaml.safe_dump({
        "version": "1.0",
        "staging": {"root": "target/staging", "description": "Test release"},
        "deploy": {"repository": str(tmp_path / "repository")},
        "server": {"type": "filesystem", "path": "server"},
    }))
    return tmp_path


def _write_build(workspace: Path, modules: List[Dict[str, Any]]) -> Path:
    entries = []
    for module in modules:
        module_id = module["id"]
        version = module.get("version", "1.0.0")
        directory = workspace / module_id
        directory.mkdir(exist_ok=True)
        (directory / "pom.xml").write_text(f"<project>{module_id}</project>")
        (directory / f"{module_id}-{version}.jar").write_bytes(module_id.encode())
        entries.append({
            "id": module_id,
            "group_id": module.get("group_id", "com.example"),
            "artifact_id": module_id,
            "version": version,
            "descriptor": f"{module_id}/pom.xml",
            "file": f"{module_id}/{module_id}-{version}.jar",
        })
        if "staging" in module:
            entries[-1]["staging"] = module["staging"]

    build_file = workspace / "build.yaml"
    build_file.write_text(yaml.safe_dump({"modules": entries}))
    return build_file


def _invoke(runner: CliRunner, workspace: Path, *args: str):
    return runner.invoke(cli, [*args, "--config", str(workspace / ".staging-deploy.yaml")])


def _repository_state(workspace: Path, repository_id: str) -> str:
    state_file = workspace / "server" / "repositories" / repository_id / ".state.json"
    return json.loads(state_file.read_text())["state"]


def test_full_build_stages_and_closes_one_repository(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [
        {"id": "a"},
        {"id": "b"},
        {"id": "c", "version": "1.0.0-SNAPSHOT"},
    ])

    result = _invoke(runner, workspace, "deploy", "--build", str(build_file))

    assert result.exit_code == 0, result.output
    assert "release-profile-0001" in result.output

    content = workspace / "server" / "repositories" / "release-profile-0001" / "content"
    uploaded = sorted(p.relative_to(content).as_posix() for p in content.rglob("*") if p.is_file())
    assert uploaded == [
        "com/example/a/1.0.0/a-1.0.0.jar",
        "com/example/a/1.0.0/a-1.0.0.pom",
        "com/example/b/1.0.0/b-1.0.0.jar",
        "com/example/b/1.0.0/b-1.0.0.pom",
    ]
    assert _repository_state(workspace, "release-profile-0001") == "closed"

    snapshot_dir = workspace / "repository" / "com/example/c/1.0.0-SNAPSHOT"
    assert len(list(snapshot_dir.glob("c-1.0.0-*.jar"))) == 1

    # Staged copies stay on disk after the commit
    assert (workspace / "target/staging/release-profile/com/example/a/1.0.0/a-1.0.0.jar").is_file()


def test_skip_remote_staging_then_commit(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a"}])

    result = _invoke(
        runner, workspace, "deploy", "--build", str(build_file),
        "--module", "a", "--skip-remote-staging",
    )

    assert result.exit_code == 0, result.output
    assert "skipping remote staging at user's demand" in result.output
    assert not (workspace / "server" / "repositories").exists()

    status = _invoke(runner, workspace, "status")
    assert status.exit_code == 0, status.output
    assert "com/example/a/1.0.0/a-1.0.0.jar" in status.output

    commit = _invoke(runner, workspace, "commit")
    assert commit.exit_code == 0, commit.output
    assert _repository_state(workspace, "release-profile-0001") == "closed"


def test_modules_deployed_one_invocation_at_a_time(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a"}, {"id": "b"}])

    first = _invoke(runner, workspace, "deploy", "--build", str(build_file), "--module", "a")
    assert first.exit_code == 0, first.output
    assert not (workspace / "server" / "repositories").exists()

    second = _invoke(runner, workspace, "deploy", "--build", str(build_file), "--module", "b")
    assert second.exit_code == 0, second.output
    content = workspace / "server" / "repositories" / "release-profile-0001" / "content"
    assert (content / "com/example/a/1.0.0/a-1.0.0.jar").is_file()
    assert (content / "com/example/b/1.0.0/b-1.0.0.jar").is_file()


def test_offline_build_fails_without_writing(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a"}])

    result = _invoke(runner, workspace, "deploy", "--build", str(build_file), "--offline")

    assert result.exit_code != 0
    assert "Connectivity Error" in result.output
    assert "offline" in result.output
    assert not (workspace / "target").exists()
    assert not (workspace / "repository").exists()
    assert not (workspace / "server" / "repositories").exists()


def test_skip_flag_succeeds_offline(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a"}])

    result = _invoke(runner, workspace, "deploy", "--build", str(build_file), "--skip", "--offline")

    assert result.exit_code == 0, result.output
    assert not (workspace / "target").exists()


def test_unmatched_group_is_reported(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a", "group_id": "net.unmatched"}])

    result = _invoke(runner, workspace, "deploy", "--build", str(build_file))

    assert result.exit_code == 1
    assert "No staging profile matches net.unmatched:a:1.0.0" in result.output
    assert "SD" in result.output


def test_explicit_profile_skips_matching(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a", "group_id": "net.unmatched"}])

    result = _invoke(
        runner, workspace, "deploy", "--build", str(build_file), "--profile", "other",
    )

    assert result.exit_code == 0, result.output
    assert _repository_state(workspace, "other-0001") == "closed"


def test_status_on_empty_staging_root(runner: CliRunner, workspace: Path) -> None:
    result = _invoke(runner, workspace, "status")

    assert result.exit_code == 0
    assert "Nothing staged" in result.output


def test_commit_after_deploy_uploads_nothing_again(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a"}, {"id": "b"}])
    deploy = _invoke(runner, workspace, "deploy", "--build", str(build_file))
    assert deploy.exit_code == 0, deploy.output

    commit = _invoke(runner, workspace, "commit")

    assert commit.exit_code == 0, commit.output
    assert "Nothing staged" in commit.output
    assert not (workspace / "server" / "repositories" / "release-profile-0002").exists()

    status = _invoke(runner, workspace, "status")
    assert "Nothing staged" in status.output


def test_second_release_build_uploads_only_new_version(runner: CliRunner, workspace: Path) -> None:
    first = _write_build(workspace, [{"id": "a"}])
    assert _invoke(runner, workspace, "deploy", "--build", str(first)).exit_code == 0

    second = _write_build(workspace, [{"id": "a", "version": "1.1.0"}])
    result = _invoke(runner, workspace, "deploy", "--build", str(second))

    assert result.exit_code == 0, result.output
    content = workspace / "server" / "repositories" / "release-profile-0002" / "content"
    uploaded = sorted(p.relative_to(content).as_posix() for p in content.rglob("*") if p.is_file())
    assert uploaded == [
        "com/example/a/1.1.0/a-1.1.0.jar",
        "com/example/a/1.1.0/a-1.1.0.pom",
    ]


def test_module_outside_staging_is_skipped(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a"}, {"id": "tools", "staging": False}])

    result = _invoke(
        runner, workspace, "deploy", "--build", str(build_file), "--module", "tools",
    )

    assert result.exit_code == 0, result.output
    assert "does not take part in staging" in result.output
    assert not (workspace / "target").exists()
    assert not (workspace / "server" / "repositories").exists()


def test_stray_directory_under_staging_root_is_ignored(runner: CliRunner, workspace: Path) -> None:
    stray = workspace / "target" / "staging" / "not a profile"
    stray.mkdir(parents=True)
    (stray / "notes.txt").write_text("left behind")

    status = _invoke(runner, workspace, "status")
    commit = _invoke(runner, workspace, "commit")

    assert status.exit_code == 0, status.output
    assert "Nothing staged" in status.output
    assert commit.exit_code == 0, commit.output
    assert not (workspace / "server" / "repositories").exists()


def test_deploy_results_as_json(runner: CliRunner, workspace: Path) -> None:
    build_file = _write_build(workspace, [{"id": "a"}])

    result = _invoke(runner, workspace, "deploy", "--build", str(build_file), "--json")

    assert result.exit_code == 0, result.output
    assert '"module_id": "a"' in result.output
    assert '"mode": "staged"' in result.output
    assert "Deploy completed successfully" not in result.output
