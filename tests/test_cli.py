"""Tests for the xkb-data command line interface."""

import json
from pathlib import Path

import yaml

from xkb_data import keyboard_layouts
from xkb_data.cli import create_parser, main

FIXTURES = Path(__file__).parent / "fixtures"


def run(capsys, *args):
    code = main(list(args))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_list_text_matches_printer_format(capsys, rules_env):
    code, out, _ = run(capsys, "list", "--rules", "base")

    assert code == 0
    assert out.splitlines() == [
        "Keyboard layouts",
        "  us: English (US)",
        "  de: German",
        "    nodeadkeys: German (no dead keys)",
    ]


def test_list_all_rules(capsys, rules_env):
    code, out, _ = run(capsys, "list", "--no-variants")

    assert code == 0
    assert out.splitlines()[1:] == [
        "  us: English (US)",
        "  de: German",
        "  apl: APL",
        "  us: English (US)",
    ]


def test_list_paths_from_options(capsys, base_rules, extra_rules):
    code, out, _ = run(
        capsys,
        "--base-rules", str(base_rules),
        "--extra-rules", str(extra_rules),
        "list", "--rules", "extras", "--no-variants",
    )

    assert code == 0
    assert out.splitlines()[1:] == ["  apl: APL", "  us: English (US)"]


def test_list_match_filters_layouts(capsys, rules_env):
    code, out, _ = run(capsys, "list", "--match", "a*")

    assert code == 0
    assert out.splitlines() == [
        "Keyboard layouts",
        "  apl: APL",
        "    dyalog: APL symbols (Dyalog APL)",
        "    unified: APL symbols (unified)",
    ]


def test_list_json(capsys, rules_env):
    code, out, _ = run(capsys, "list", "--rules", "base", "--format", "json")

    assert code == 0
    data = json.loads(out)
    assert [layout["name"] for layout in data["layouts"]] == ["us", "de"]
    assert data["layouts"][0]["variants"] is None
    assert data["layouts"][1]["variants"][0]["name"] == "nodeadkeys"


def test_list_yaml_without_variants(capsys, rules_env):
    code, out, _ = run(capsys, "list", "--rules", "base", "--format", "yaml", "--no-variants")

    assert code == 0
    data = yaml.safe_load(out)
    assert data == {
        "layouts": [
            {"name": "us", "short_description": "en", "description": "English (US)"},
            {"name": "de", "short_description": "de", "description": "German"},
        ]
    }


def test_list_table(capsys, rules_env):
    code, out, _ = run(capsys, "list", "--rules", "base", "--format", "table")

    lines = out.splitlines()
    assert code == 0
    assert lines[0].split() == ["Layout", "Variant", "Description"]
    assert lines[-1].split() == ["de", "nodeadkeys", "German", "(no", "dead", "keys)"]


def test_list_output_file(capsys, rules_env, tmp_path):
    output = tmp_path / "layouts.txt"

    code, out, err = run(capsys, "list", "--rules", "base", "--output-file", str(output))

    assert code == 0
    assert out == ""
    assert "Output saved to" in err
    assert output.read_text(encoding="utf-8").startswith("Keyboard layouts\n  us: English (US)\n")


def test_list_output_file_unwritable(capsys, rules_env, tmp_path):
    output = tmp_path / "missing" / "layouts.txt"

    code, out, err = run(capsys, "list", "--rules", "base", "--output-file", str(output))

    assert code == 1
    assert out == ""
    assert "Error: Cannot write output file" in err


def test_format_from_environment(capsys, rules_env, monkeypatch):
    monkeypatch.setenv("XKB_DATA_OUTPUT_FORMAT", "json")

    code, out, _ = run(capsys, "list", "--rules", "base")

    assert code == 0
    assert len(json.loads(out)["layouts"]) == 2


def test_config_file(capsys, tmp_path, base_rules):
    config_file = tmp_path / "xkb-data.yaml"
    config_file.write_text(f"base_rules_xml: {base_rules}\nrule_set: base\n")

    code, out, _ = run(capsys, "--config", str(config_file), "list", "--no-variants")

    assert code == 0
    assert out.splitlines()[1:] == ["  us: English (US)", "  de: German"]


def test_environment_beats_config_file_path(capsys, monkeypatch, tmp_path, base_rules):
    """The CLI resolves rules paths the same way as keyboard_layouts()."""
    config_file = tmp_path / "xkb-data.yaml"
    config_file.write_text(f"base_rules_xml: {tmp_path / 'missing.xml'}\n")
    monkeypatch.setenv("X11_BASE_RULES_XML", str(base_rules))

    code, out, _ = run(capsys, "--config", str(config_file), "list", "--rules", "base", "--no-variants")

    assert code == 0
    assert out.splitlines()[1:] == ["  us: English (US)", "  de: German"]
    assert [layout.name() for layout in keyboard_layouts().layouts()] == ["us", "de"]


def test_missing_config_file(capsys, tmp_path):
    code, _, err = run(capsys, "--config", str(tmp_path / "missing.yaml"), "list")

    assert code == 1
    assert "Configuration file not found" in err


def test_show_layout(capsys, rules_env):
    code, out, _ = run(capsys, "show", "de")

    assert code == 0
    assert out.splitlines() == ["  de: German", "    nodeadkeys: German (no dead keys)"]


def test_show_unknown_layout(capsys, rules_env):
    code, _, err = run(capsys, "show", "xx")

    assert code == 1
    assert "Layout 'xx' not found" in err


def test_missing_rules_file(capsys, monkeypatch, tmp_path):
    monkeypatch.setenv("X11_BASE_RULES_XML", str(tmp_path / "missing.xml"))

    code, _, err = run(capsys, "list", "--rules", "base")

    assert code == 1
    assert "Cannot access rules file" in err


def test_malformed_rules_file(capsys, monkeypatch):
    monkeypatch.setenv("X11_BASE_RULES_XML", str(FIXTURES / "invalid.xml"))

    code, _, err = run(capsys, "list", "--rules", "base")

    assert code == 1
    assert "Invalid rules file" in err


def test_config_template(capsys):
    code, out, _ = run(capsys, "config-template")

    assert code == 0
    assert yaml.safe_load(out)["base_rules_xml"] == "/usr/share/X11/xkb/rules/base.xml"


def test_no_command_prints_help(capsys):
    code, out, _ = run(capsys)

    assert code == 1
    assert "usage:" in out


def test_verbose_and_quiet_conflict(capsys):
    code, _, err = run(capsys, "-v", "-q", "list")

    assert code == 1
    assert "Cannot use both" in err


def test_parser_defaults():
    args = create_parser().parse_args(["list"])

    assert args.rules is None
    assert args.format is None
    assert args.match is None
    assert args.no_variants is False
