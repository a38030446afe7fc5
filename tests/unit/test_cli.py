"""Unit tests for yamlref.cli: the ``yaml-reference`` Click application."""
from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import yaml
from click.testing import CliRunner

from yamlref.cli.main import cli

WriteYaml = Callable[[str, str], Path]


# ===========================================================================
# Helpers
# ===========================================================================


def _make_runner() -> CliRunner:
    return CliRunner()


# ===========================================================================
# resolve
# ===========================================================================


class TestResolveCommand:
    def test_prints_sorted_json(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "zeta: 1\ndatabase: !reference {path: db.yaml}\n")
        write_yaml("db.yaml", "port: 5432\nhost: localhost\n")

        result = _make_runner().invoke(cli, ["resolve", str(main)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "database": {"host": "localhost", "port": 5432},
            "zeta": 1,
        }
        assert result.output.index('"database"') < result.output.index('"zeta"')
        assert result.output.index('"host"') < result.output.index('"port"')
        assert '\n  "database": {\n    "host"' in result.output

    def test_yaml_format(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "items: !flatten [1, [2]]\n")

        result = _make_runner().invoke(cli, ["resolve", str(main), "--format", "yaml"])

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.output) == {"items": [1, 2]}

    def test_allow_option(self, write_yaml: WriteYaml, tmp_path: Path) -> None:
        main = write_yaml("sub/main.yaml", "cfg: !reference {path: ../shared/cfg.yaml}\n")
        write_yaml("shared/cfg.yaml", "a: 1\n")

        denied = _make_runner().invoke(cli, ["resolve", str(main)])
        allowed = _make_runner().invoke(
            cli, ["resolve", str(main), "--allow", str(tmp_path / "shared")]
        )

        assert denied.exit_code == 1
        assert "is not allowed" in denied.output
        assert allowed.exit_code == 0, allowed.output
        assert json.loads(allowed.output) == {"cfg": {"a": 1}}

    def test_repeated_allow_option(self, write_yaml: WriteYaml, tmp_path: Path) -> None:
        main = write_yaml(
            "sub/main.yaml",
            "a: !reference {path: ../one/a.yaml}\nb: !reference {path: ../two/b.yaml}\n",
        )
        write_yaml("one/a.yaml", "1\n")
        write_yaml("two/b.yaml", "2\n")

        result = _make_runner().invoke(
            cli,
            ["resolve", str(main), "--allow", str(tmp_path / "one"), "--allow", str(tmp_path / "two")],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"a": 1, "b": 2}

    def test_output_file(self, write_yaml: WriteYaml, tmp_path: Path) -> None:
        main = write_yaml("main.yaml", "a: 1\n")
        out = tmp_path / "compiled" / "out.json"

        result = _make_runner().invoke(cli, ["resolve", str(main), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8")) == {"a": 1}

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope.yaml"

        result = _make_runner().invoke(cli, ["resolve", str(missing)])

        assert result.exit_code == 1
        assert "Error: File not found" in result.output

    def test_circular_reference_reported(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "me: !reference {path: main.yaml}\n")

        result = _make_runner().invoke(cli, ["resolve", str(main)])

        assert result.exit_code == 1
        assert "Circular reference detected" in result.output

    def test_invalid_yaml_reported(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "invalid: yaml: with: colons\n")

        result = _make_runner().invoke(cli, ["resolve", str(main)])

        assert result.exit_code == 1
        assert "Failed to parse YAML file" in result.output

    def test_referenced_file_not_utf8_reported(self, write_yaml: WriteYaml, tmp_path: Path) -> None:
        main = write_yaml("main.yaml", "bad: !reference {path: bad.yaml}\n")
        (tmp_path / "bad.yaml").write_bytes(b"k: \xff\xfe\n")

        result = _make_runner().invoke(cli, ["resolve", str(main)])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "invalid utf-8" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_recursive_alias_reported(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "a: &x [*x]\n")

        result = _make_runner().invoke(cli, ["resolve", str(main)])

        assert result.exit_code == 1
        assert "recursive alias" in result.output

    def test_nan_rejected_as_json(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "ratio: .nan\n")

        result = _make_runner().invoke(cli, ["resolve", str(main)])

        assert result.exit_code == 1
        assert "Cannot serialize document as json" in result.output
        assert "NaN" not in result.output

    def test_nan_allowed_as_yaml(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "ratio: .inf\n")

        result = _make_runner().invoke(cli, ["resolve", str(main), "--format", "yaml"])

        assert result.exit_code == 0, result.output
        assert ".inf" in result.output

    def test_missing_file_argument(self) -> None:
        result = _make_runner().invoke(cli, ["resolve"])
        assert result.exit_code != 0

    def test_unknown_option(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "a: 1\n")
        result = _make_runner().invoke(cli, ["resolve", str(main), "--bogus"])
        assert result.exit_code != 0

    def test_verbose_succeeds(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "a: !reference {path: b.yaml}\n")
        write_yaml("b.yaml", "1\n")

        result = _make_runner().invoke(cli, ["resolve", str(main), "--verbose"])

        assert result.exit_code == 0, result.output


# ===========================================================================
# parse
# ===========================================================================


class TestParseCommand:
    def test_prints_markers_unresolved(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "db: !reference {path: missing.yaml}\n")

        result = _make_runner().invoke(cli, ["parse", str(main)])

        assert result.exit_code == 0, result.output
        assert "!reference" in result.output
        assert "missing.yaml" in result.output

    def test_invalid_marker_reported(self, write_yaml: WriteYaml) -> None:
        main = write_yaml("main.yaml", "db: !reference {path: /etc/passwd}\n")

        result = _make_runner().invoke(cli, ["parse", str(main)])

        assert result.exit_code == 1
        assert "must be relative" in result.output


# ===========================================================================
# version / help
# ===========================================================================


class TestMiscCommands:
    def test_version_command(self) -> None:
        result = _make_runner().invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "yaml-reference" in result.output

    def test_help_lists_commands(self) -> None:
        result = _make_runner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("resolve", "parse", "version"):
            assert command in result.output

    def test_resolve_help(self) -> None:
        result = _make_runner().invoke(cli, ["resolve", "--help"])
        assert result.exit_code == 0
        assert "--allow" in result.output
