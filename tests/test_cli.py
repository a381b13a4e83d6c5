"""Tests for the click entry point."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from filipec_install import cli
from filipec_install.cli import main


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    repo = tmp_path / "repo"
    repo.mkdir()
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(repo)
    return repo, home


def _run(*args: str):
    return CliRunner().invoke(main, list(args))


class TestMain:
    def test_bash_success(self, workspace):
        repo, home = workspace
        (home / ".bashrc").write_text("export A=1\n")
        result = _run("--shell", "bash", "--home", str(home))
        assert result.exit_code == 0, result.output
        last = (home / ".bashrc").read_text().splitlines()[-1]
        assert last == f'alias filipec="{repo / "scripts" / "filipec"}"'

    def test_zsh_success(self, workspace):
        repo, home = workspace
        (home / ".zshrc").write_text("")
        result = _run("--shell", "zsh", "--home", str(home))
        assert result.exit_code == 0, result.output
        assert "source" in result.output

    def test_missing_rc_exits_1(self, workspace):
        _, home = workspace
        result = _run("--shell", "bash", "--home", str(home))
        assert result.exit_code == 1
        assert ".bashrc" in result.output
        assert not (home / ".bashrc").exists()

    def test_unrecognized_shell_exits_1(self, workspace):
        _, home = workspace
        (home / ".bashrc").write_text("")
        result = _run("--shell", "fish", "--home", str(home))
        assert result.exit_code == 1
        assert "fish" in result.output
        assert (home / ".bashrc").read_text() == ""

    def test_detects_shell_when_not_given(self, workspace, monkeypatch):
        _, home = workspace
        (home / ".zshrc").write_text("")
        monkeypatch.setattr(cli, "detect_shell", lambda: "zsh")
        result = _run("--home", str(home))
        assert result.exit_code == 0, result.output
        assert "alias filipec=" in (home / ".zshrc").read_text()

    def test_append_always_twice(self, workspace):
        _, home = workspace
        (home / ".bashrc").write_text("")
        _run("--shell", "bash", "--home", str(home), "--append-always")
        _run("--shell", "bash", "--home", str(home), "--append-always")
        lines = (home / ".bashrc").read_text().splitlines()
        assert len(lines) == 2 and lines[0] == lines[1]

    def test_default_run_twice_keeps_one_line(self, workspace):
        _, home = workspace
        (home / ".bashrc").write_text("")
        _run("--shell", "bash", "--home", str(home))
        result = _run("--shell", "bash", "--home", str(home))
        assert "already present" in result.output
        assert len((home / ".bashrc").read_text().splitlines()) == 1

    def test_script_override(self, workspace):
        _, home = workspace
        (home / ".bashrc").write_text("")
        _run("--shell", "bash", "--home", str(home), "--script", "/opt/filipec")
        assert (home / ".bashrc").read_text() == 'alias filipec="/opt/filipec"\n'

    def test_file_config_applied(self, workspace):
        repo, home = workspace
        (home / ".bashrc").write_text("")
        (repo / "pyproject.toml").write_text('[tool.filipec]\nalias = "fl"\n')
        result = _run("--shell", "bash", "--home", str(home))
        assert result.exit_code == 0, result.output
        assert (home / ".bashrc").read_text().startswith('alias fl="')

    def test_invalid_file_config(self, workspace):
        repo, home = workspace
        (repo / "pyproject.toml").write_text("[tool.filipec]\nbogus = 1\n")
        result = _run("--shell", "bash", "--home", str(home))
        assert result.exit_code == 1
        assert "unknown key 'bogus'" in result.output

    def test_version(self):
        result = _run("--version")
        assert result.exit_code == 0
        assert "filipec-install" in result.output

    @pytest.mark.parametrize("bad_alias", ["fil ipec", "", "a=b"])
    def test_invalid_alias_rejected(self, workspace, bad_alias):
        _, home = workspace
        (home / ".bashrc").write_text("")
        result = _run("--shell", "bash", "--home", str(home), "--alias", bad_alias)
        assert result.exit_code == 2
        assert "not a valid alias name" in result.output
        assert (home / ".bashrc").read_text() == ""

    @pytest.mark.parametrize(("shell", "rc_name"), [("/bin/zsh", ".zshrc"), ("-bash", ".bashrc")])
    def test_shell_option_normalized(self, workspace, shell, rc_name):
        _, home = workspace
        (home / rc_name).write_text("")
        result = _run(f"--shell={shell}", "--home", str(home))
        assert result.exit_code == 0, result.output
        assert "alias filipec=" in (home / rc_name).read_text()

    def test_latin1_rc_file(self, workspace):
        repo, home = workspace
        rc = home / ".bashrc"
        rc.write_bytes(b"# caf\xe9\nexport A=1\n")
        result = _run("--shell", "bash", "--home", str(home))
        assert result.exit_code == 0, result.output
        expected = f'alias filipec="{repo / "scripts" / "filipec"}"\n'.encode()
        assert rc.read_bytes() == b"# caf\xe9\nexport A=1\n" + expected
