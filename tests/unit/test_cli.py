"""
Tests for the pm command line.

This test suite covers:
1. Help output
2. Config generation (-G)
3. Query (-Q)
4. Install (-S) and clean (-C) against a temporary pack directory
5. Error exit codes
"""

import tempfile
from pathlib import Path

from pm.cli import main


def write_config(directory: Path, body: str) -> Path:
    config = directory / "ppm.toml"
    config.write_text(f'packpath = "{directory / "site"}"\n{body}')
    return config


class TestCLI:
    """Test CLI routing and exit codes."""

    def test_help(self, capsys):
        """No operation prints help."""
        assert main([]) == 0
        assert "Pack Plugin Manager" in capsys.readouterr().out

    def test_generate_config(self, capsys):
        """-G writes a default config once."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = Path(tmpdir) / "ppm.toml"

            assert main(["-G", "--config", str(config)]) == 0
            assert config.exists()
            assert main(["-G", "--config", str(config)]) == 1
            assert "already exists" in capsys.readouterr().err

    def test_query(self, capsys):
        """-Q lists declared plugins with their state."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = write_config(
                Path(tmpdir),
                '[[plugins]]\nname = "ns/a"\npath = "https://example/a"\n',
            )

            assert main(["-Q", "--config", str(config)]) == 0
            assert "ns/start/a [git] missing" in capsys.readouterr().out

    def test_install_and_clean_local_plugin(self):
        """-S links a local plugin and -C removes an undeclared one."""
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            source = directory / "src"
            source.mkdir()
            config = write_config(
                directory,
                f'[[plugins]]\nname = "mine"\npath = "{source}"\ntype = "local"\nopt = true\n',
            )
            stale = directory / "site" / "pack" / "old" / "start" / "gone"
            stale.mkdir(parents=True)

            assert main(["-S", "--config", str(config)]) == 0
            assert (directory / "site" / "pack" / "unnamed" / "opt" / "mine").is_symlink()

            assert main(["-C", "--config", str(config)]) == 0
            assert not stale.exists()
            assert (directory / "site" / "pack" / "unnamed" / "opt" / "mine").is_symlink()

    def test_install_failure_exit_code(self, capsys):
        """A failing plugin is reported on stderr and exits 1."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = write_config(
                Path(tmpdir),
                '[[plugins]]\nname = "x"\npath = "u"\ntype = "svn"\n',
            )

            assert main(["-S", "--config", str(config)]) == 1
            assert "Failed to install unnamed/start/x: unknown plugin type: svn" in (
                capsys.readouterr().err
            )

    def test_invalid_plugin_name(self, capsys):
        """A malformed name aborts initialization."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = write_config(
                Path(tmpdir),
                '[[plugins]]\nname = "a/b/c"\npath = "u"\n',
            )

            assert main(["-S", "--config", str(config)]) == 1
            assert "Error: Invalid plugin name: a/b/c" in capsys.readouterr().err
