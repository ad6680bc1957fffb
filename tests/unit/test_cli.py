"""Tests for the typer CLI wiring."""

import logging
from unittest.mock import call

import pytest
from typer.testing import CliRunner

from stowaway.cli import app
from stowaway.cli.helpers import AppContext
from stowaway.errors import CommandError, DetectionError
from stowaway.system import OS, Distro, Platform

cli = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the stdout handler bound to the CliRunner's stream."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.fixture
def runner(mocker):
    return mocker.Mock()


@pytest.fixture
def dotfiles_dir(tmp_path):
    path = tmp_path / "dotfiles"
    path.mkdir()
    return path


@pytest.fixture
def config_file(tmp_path, dotfiles_dir):
    path = tmp_path / "config.yml"
    path.write_text(
        "dotfiles_repo: https://example.com/dots.git\n"
        f"dotfiles_dir: {dotfiles_dir}\n"
        "tools: [git, htop]\n"
    )
    return path


def _invoke(args, config_file, runner):
    obj = AppContext(config_path=config_file, runner=runner)
    return cli.invoke(app, args, obj=obj)


def test_version():
    result = cli.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "stowaway version" in result.output


def test_push_nothing_to_do(config_file, runner):
    runner.capture.return_value = ""

    result = _invoke(["push"], config_file, runner)

    assert result.exit_code == 0
    assert "No changes to push." in result.output
    runner.run.assert_not_called()


def test_push_failure_exits_1(config_file, runner):
    runner.capture.side_effect = [" M .zshrc\n", "M\t.zshrc\n"]
    runner.run.side_effect = [
        None,
        None,
        CommandError("git", ["push"], returncode=1),
    ]

    result = _invoke(["push"], config_file, runner)

    assert result.exit_code == 1
    assert "Command failed: git push" in result.output


def test_sync_pulls_then_stows(config_file, dotfiles_dir, runner):
    result = _invoke(["sync"], config_file, runner)

    assert result.exit_code == 0
    assert [c.args[0] for c in runner.run.call_args_list] == ["git", "stow"]


def test_setup_with_existing_checkout_only_stows(
    config_file, dotfiles_dir, runner
):
    result = _invoke(["setup"], config_file, runner)

    assert result.exit_code == 0
    runner.run.assert_called_once()
    args = runner.run.call_args.args
    assert args[:3] == ("stow", "-d", str(dotfiles_dir))
    assert args[-1] == "."


def test_install_with_skip(mocker, config_file, runner):
    mocker.patch(
        "stowaway.cli.install.detect_platform",
        return_value=Platform(OS.LINUX, Distro.FEDORA, "fedora", "Linux"),
    )
    mocker.patch("stowaway.system.shutil.which", return_value=None)
    mocker.patch("stowaway.packages.os.geteuid", return_value=1000)

    result = _invoke(["install", "--skip", "git"], config_file, runner)

    assert result.exit_code == 0, result.output
    assert runner.run.call_args_list == [
        call("sudo", "dnf", "install", "-y", "htop"),
    ]
    assert "Skipping tool: git" in result.output


def test_install_unsupported_distro(mocker, config_file, runner):
    mocker.patch(
        "stowaway.cli.install.detect_platform",
        return_value=Platform(OS.LINUX, Distro.OTHER, "gentoo", "Linux"),
    )
    mocker.patch("stowaway.system.shutil.which", return_value=None)

    result = _invoke(["install"], config_file, runner)

    assert result.exit_code == 1
    assert "Unsupported Linux distribution: gentoo" in result.output
    runner.run.assert_not_called()


def test_install_unsupported_distro_nothing_missing(mocker, config_file, runner):
    mocker.patch(
        "stowaway.cli.install.detect_platform",
        return_value=Platform(OS.LINUX, Distro.OTHER, "linuxmint", "Linux"),
    )
    mocker.patch("stowaway.system.shutil.which", return_value="/usr/bin/x")

    result = _invoke(["install"], config_file, runner)

    assert result.exit_code == 0, result.output
    assert "All tools are already installed." in result.output
    runner.run.assert_not_called()


def test_install_empty_tool_list_skips_detection(mocker, tmp_path, runner):
    path = tmp_path / "empty.yml"
    path.write_text("tools: []\n")
    detect = mocker.patch(
        "stowaway.cli.install.detect_platform",
        side_effect=DetectionError("no /etc/os-release"),
    )

    result = _invoke(["install"], path, runner)

    assert result.exit_code == 0, result.output
    assert "No tools specified for installation." in result.output
    detect.assert_not_called()


def test_install_everything_skipped(mocker, config_file, runner):
    mocker.patch(
        "stowaway.cli.install.detect_platform",
        return_value=Platform(OS.LINUX, Distro.FEDORA, "fedora", "Linux"),
    )
    mocker.patch("stowaway.system.shutil.which", return_value=None)

    result = _invoke(["install", "--skip", "git,htop"], config_file, runner)

    assert result.exit_code == 0, result.output
    assert "every tool was skipped" in result.output
    assert "already installed" not in result.output
    runner.run.assert_not_called()


def test_missing_config_exits_1(tmp_path, runner):
    result = _invoke(["pull"], tmp_path / "missing.yml", runner)

    assert result.exit_code == 1
    assert "Failed to read config file" in result.output


def test_init_without_config(mocker, tmp_path, runner, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    mocker.patch("pathlib.Path.home", return_value=home)

    obj = AppContext(runner=runner)
    result = cli.invoke(app, ["init", "--remote", "git@x:me/d.git"], obj=obj)

    assert result.exit_code == 0, result.output
    assert (home / "dotfiles").is_dir()
    assert runner.run.call_args_list == [
        call("git", "init", cwd=home / "dotfiles"),
        call("git", "remote", "add", "origin", "git@x:me/d.git",
             cwd=home / "dotfiles"),
    ]
    assert "initialized successfully" in result.output


def test_upgrade_runs_uv(mocker, runner):
    mocker.patch("stowaway.cli.upgrade.shutil.which", return_value="/bin/uv")

    result = cli.invoke(app, ["upgrade"], obj=AppContext(runner=runner))

    assert result.exit_code == 0, result.output
    runner.run.assert_called_once_with("uv", "tool", "upgrade", "stowaway")
    assert "Upgrade complete" in result.output


def test_upgrade_without_uv(mocker, runner):
    mocker.patch("stowaway.cli.upgrade.shutil.which", return_value=None)

    result = cli.invoke(app, ["upgrade"], obj=AppContext(runner=runner))

    assert result.exit_code == 1
    runner.run.assert_not_called()
