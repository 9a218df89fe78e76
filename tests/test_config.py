"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from valexpr.cli import build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"format": "json"}

    def test_auto_discover_valexpr_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "valexpr.toml"
        cfg.write_text("[lexer]\nmerge_operators = false\n")
        result = load_config(None, tmp_path)
        assert result["lexer"] == {"merge_operators": False}


class TestConfigMerge:
    def _resolve(self, tmp_path: Path, config: str, *flags: str):
        (tmp_path / "valexpr.toml").write_text(config)
        src = tmp_path / "in.val"
        src.write_text("1")
        p = build_parser()
        return resolve_options(p.parse_args([str(src), *flags]))

    def test_defaults(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, "")
        assert opts.lexer.merge_operators is True
        assert opts.lexer.normalize is False
        assert opts.output_format == "tree"

    def test_config_lexer_options(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, "[lexer]\nmerge_operators = false\nnormalize = true\n")
        assert opts.lexer.merge_operators is False
        assert opts.lexer.normalize is True

    def test_cli_split_overrides_config(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, "[lexer]\nmerge_operators = true\n", "--split-operators")
        assert opts.lexer.merge_operators is False

    def test_config_format(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[output]\nformat = "json"\n')
        assert opts.output_format == "json"

    def test_cli_format_overrides_config(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[output]\nformat = "json"\n', "--format", "tree")
        assert opts.output_format == "tree"

    def test_invalid_config_format(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="invalid output format"):
            self._resolve(tmp_path, '[output]\nformat = "xml"\n')

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        src = tmp_path / "in.val"
        src.write_text("1")
        p = build_parser()
        opts = resolve_options(p.parse_args([str(src), "--config", str(cfg)]))
        assert opts.output_format == "json"


class TestConfigExitCodes:
    def test_invalid_format_exit_2(self, tmp_path: Path) -> None:
        (tmp_path / "valexpr.toml").write_text('[output]\nformat = "xml"\n')
        src = tmp_path / "in.val"
        src.write_text("1")
        assert main([str(src)]) == 2

    def test_malformed_toml_exit_2(self, tmp_path: Path) -> None:
        cfg = tmp_path / "broken.toml"
        cfg.write_text("[lexer\n")
        assert main(["--expr", "1", "--config", str(cfg)]) == 2

    def test_config_applies_end_to_end(self, tmp_path: Path) -> None:
        (tmp_path / "valexpr.toml").write_text("[lexer]\nmerge_operators = false\n")
        src = tmp_path / "in.val"
        src.write_text("f()\n")
        out = tmp_path / "out.txt"
        assert main([str(src), "-o", str(out)]) == 0
        assert "CallExpression f" in out.read_text()
