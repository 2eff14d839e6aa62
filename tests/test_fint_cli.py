from __future__ import annotations

import io

import pytest

from fint import EXIT_FILE_ERROR, EXIT_NO_PROGRAM, EXIT_OK, EXIT_SYNTAX_ERROR, main


def test_cli_prints_variables_sorted_by_name(capsys):
    code = main(["y = x / 2;", "x = 2+3*4; y = x / 4"])

    out, err = capsys.readouterr()
    assert code == EXIT_OK
    assert err.startswith("line 1:4 Undefined variable: x")
    assert out == "x=14\ny=3.5\n"


def test_cli_reports_diagnostics_on_stderr_and_continues(capsys):
    code = main(["y = z + 1; w = pow(2)"])

    out, err = capsys.readouterr()
    assert code == EXIT_OK
    assert out == "w=nan\ny=nan\n"
    assert "line 1:4 Undefined variable: z" in err
    assert "line 1:15 Invalid number of arguments for function pow" in err


def test_cli_reads_program_from_file(tmp_path, capsys):
    path = tmp_path / "program.fint"
    path.write_text("a = 1;\nb = a + 1;\n", encoding="utf-8")

    code = main(["-f", str(path)])

    assert code == EXIT_OK
    assert capsys.readouterr().out == "a=1\nb=2\n"


def test_cli_returns_file_error_for_missing_file(tmp_path, capsys):
    code = main(["-f", str(tmp_path / "missing.fint")])

    assert code == EXIT_FILE_ERROR
    assert "Unable to open file" in capsys.readouterr().err


def test_cli_syntax_error_aborts_before_evaluation(capsys):
    code = main(["x = 1; y = (2"])

    out, err = capsys.readouterr()
    assert code == EXIT_SYNTAX_ERROR
    assert out == ""
    assert err.startswith("line 1:13 ")


def test_cli_reads_stdin_when_no_program_given(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("a = ln(1)"))

    assert main([]) == EXIT_OK
    assert capsys.readouterr().out == "a=0\n"


def test_cli_without_program_returns_usage_error(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    assert main([]) == EXIT_NO_PROGRAM
    assert "usage" in capsys.readouterr().err


def test_cli_precision_option(capsys):
    main(["--precision", "3", "x = 1/3"])

    assert capsys.readouterr().out == "x=0.333\n"


def test_cli_precision_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("FINT_OUTPUT_PRECISION", "4")

    main(["x = 2/3"])

    assert capsys.readouterr().out == "x=0.6667\n"


def test_cli_table_output(capsys):
    main(["--table", "alpha = 1; beta = -alpha"])

    out = capsys.readouterr().out
    assert "Variables [2]" in out
    assert "alpha" in out and "beta" in out
    assert "-1" in out


def test_cli_debug_prints_tokens_and_tree(capsys):
    main(["--debug", "x = 2^3^2"])

    out = capsys.readouterr().out
    assert "Tokens [8]" in out
    assert "factor ^ ^" in out
    assert out.rstrip().endswith("x=64")


def test_cli_deep_nesting_is_a_syntax_error(capsys):
    code = main(["x = " + "(" * 300 + "1" + ")" * 300])

    out, err = capsys.readouterr()
    assert code == EXIT_SYNTAX_ERROR
    assert out == ""
    assert "nested too deeply" in err


@pytest.mark.parametrize("value", ["-1", "0", "18", "abc"])
def test_cli_rejects_precision_out_of_range(value, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--precision", value, "x = 1"])

    assert exc_info.value.code == 2
    assert "--precision" in capsys.readouterr().err


def test_cli_precision_bounds_are_accepted(capsys):
    main(["-p", "1", "x = 2/3"])
    main(["-p", "17", "y = 0.5"])

    assert capsys.readouterr().out == "x=0.7\ny=0.5\n"
