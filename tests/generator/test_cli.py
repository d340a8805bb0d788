from pathlib import Path

import pytest

from docexample.generator.cli import _default_class_name, _snake_case, main
from docexample.settings import Settings

DOCUMENTED = '''"""Shop helpers."""


def total(prices):
    """Sum of prices.

    @example basic: adds everything

    ```
    assert sum([1, 2]) == 3
    ```
    """
    return sum(prices)
'''


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr("docexample.generator.cli.setup_logging", lambda **kwargs: None)


def _make_source(tmp_path: Path) -> Path:
    source_dir = tmp_path / "my_shop"
    source_dir.mkdir()
    (source_dir / "prices.py").write_text(DOCUMENTED)
    return source_dir


def test_generate_writes_module(tmp_path: Path, capsys):
    source_dir = _make_source(tmp_path)
    output = tmp_path / "out" / "shop_examples.py"
    assert main(["--source-dir", str(source_dir), "--output", str(output), "generate"]) == 0
    text = output.read_text()
    assert "class MyShopExamples(unittest.TestCase, docexample.runtime.FreeSpec):" in text
    assert "def test_1_prices(self):" in text
    assert "wrote" in capsys.readouterr().out


def test_generate_applies_overrides(tmp_path: Path):
    source_dir = _make_source(tmp_path)
    output = tmp_path / "examples.py"
    argv = [
        "--source-dir",
        str(source_dir),
        "--output",
        str(output),
        "--class-name",
        "PriceSpec",
        "--super-type",
        "unittest.TestCase",
        "generate",
    ]
    assert main(argv) == 0
    text = output.read_text()
    assert "class PriceSpec(unittest.TestCase):" in text
    assert "docexample.runtime" not in text


def test_configured_class_name_is_used(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("docexample.generator.cli.settings", Settings(_env_file=None, class_name="EnvSpec"))
    source_dir = _make_source(tmp_path)
    output = tmp_path / "examples.py"
    assert main(["--source-dir", str(source_dir), "--output", str(output), "generate"]) == 0
    assert "class EnvSpec(" in output.read_text()


def test_command_line_class_name_wins_over_settings(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("docexample.generator.cli.settings", Settings(_env_file=None, class_name="EnvSpec"))
    source_dir = _make_source(tmp_path)
    output = tmp_path / "examples.py"
    assert main(["--source-dir", str(source_dir), "--output", str(output), "--class-name", "CliSpec", "generate"]) == 0
    assert "class CliSpec(" in output.read_text()


def test_check_passes_when_up_to_date(tmp_path: Path, capsys):
    source_dir = _make_source(tmp_path)
    output = tmp_path / "examples.py"
    argv = ["--source-dir", str(source_dir), "--output", str(output)]
    assert main([*argv, "generate"]) == 0
    assert main([*argv, "check"]) == 0
    assert "up-to-date" in capsys.readouterr().out


def test_check_fails_when_stale(tmp_path: Path, capsys):
    source_dir = _make_source(tmp_path)
    output = tmp_path / "examples.py"
    output.write_text("# old\n")
    assert main(["--source-dir", str(source_dir), "--output", str(output), "check"]) == 1
    assert "stale" in capsys.readouterr().out


def test_check_fails_when_missing(tmp_path: Path, capsys):
    source_dir = _make_source(tmp_path)
    output = tmp_path / "examples.py"
    assert main(["--source-dir", str(source_dir), "--output", str(output), "check"]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_output_inside_source_dir_is_not_scanned(tmp_path: Path):
    source_dir = _make_source(tmp_path)
    output = source_dir / "my_shop_examples.py"
    argv = ["--source-dir", str(source_dir), "--output", str(output)]
    assert main([*argv, "generate"]) == 0
    assert main([*argv, "check"]) == 0


def test_invalid_source_reports_failure(tmp_path: Path, capsys):
    source_dir = _make_source(tmp_path)
    (source_dir / "broken.py").write_text("def broken(:\n")
    assert main(["--source-dir", str(source_dir), "--output", str(tmp_path / "x.py"), "generate"]) == 1
    assert "broken.py:1" in capsys.readouterr().err


def test_invalid_options_report_failure(tmp_path: Path, capsys):
    source_dir = _make_source(tmp_path)
    argv = ["--source-dir", str(source_dir), "--output", str(tmp_path / "x.py"), "--input-dialect", "2.7", "generate"]
    assert main(argv) == 1
    assert "invalid options" in capsys.readouterr().err


def test_warnings_are_printed(tmp_path: Path, capsys):
    source_dir = _make_source(tmp_path)
    (source_dir / "odd.py").write_text('def f():\n    """@frobnicate\n\n    ```\n    pass\n    ```\n    """\n')
    assert main(["--source-dir", str(source_dir), "--output", str(tmp_path / "x.py"), "generate"]) == 0
    assert "WARNING:" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage:" in capsys.readouterr().out


def test_default_class_name():
    assert _default_class_name(Path("my_shop")) == "MyShopExamples"
    assert _default_class_name(Path("web-api")) == "WebApiExamples"
    assert _default_class_name(Path("123")) == "DocExamples"


def test_snake_case():
    assert _snake_case("MyShopExamples") == "my_shop_examples"
    assert _snake_case("DocExamples") == "doc_examples"
