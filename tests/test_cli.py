import io
import json

import pytest

from lox.__main__ import Shell, main
from lox.errors import ErrorReporter
from lox.interpreter import Interpreter


def write_script(tmp_path, source):
    path = tmp_path / 'script.lox'
    path.write_text(source, encoding='utf-8')
    return str(path)


def test_runs_script(tmp_path, capsys):
    main([write_script(tmp_path, 'var a = 2;\nprint a * 21;\n')])
    assert capsys.readouterr().out.strip() == '42'


def test_parse_error_exit_status(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([write_script(tmp_path, 'print "never";\nvar;\n')])
    assert excinfo.value.code == 65
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.strip() == "[line 2] Error at ';': Expect variable name."


def test_runtime_error_exit_status(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([write_script(tmp_path, 'print "first";\nprint missing;\nprint "never";\n')])
    assert excinfo.value.code == 70
    captured = capsys.readouterr()
    assert captured.out.strip() == 'first'
    assert captured.err.strip() == "Undefined variable 'missing'.\n[line 2]"


def test_missing_script(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'nope.lox')])
    assert excinfo.value.code == 66


def test_emit_ast(tmp_path, capsys):
    main(['--emit-ast', write_script(tmp_path, 'print -x;')])
    obj = json.loads(capsys.readouterr().out)
    assert obj[0]["__node__"] == "Print"
    assert obj[0]["expression"]["__node__"] == "Unary"
    assert obj[0]["expression"]["right"]["name"]["lexeme"] == "x"


def test_debug_file_written(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    main(['-vv', write_script(tmp_path, 'var a = 1;')])
    log = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'define a = 1' in log


def test_shell_keeps_state_and_recovers_from_errors():
    out = io.StringIO()
    err = io.StringIO()
    interpreter = Interpreter(ErrorReporter(err), out=out)
    shell = Shell(interpreter, stdin=io.StringIO('var a = 1;\na + 1;\nprint ;\nprint a;\nexit\n'), stdout=io.StringIO())
    shell.use_rawinput = False
    shell.cmdloop()
    assert out.getvalue().splitlines() == ['2', '1']
    assert err.getvalue().strip() == "[line 1] Error at ';': Expect expression."


def test_shell_runs_lines_named_like_shell_commands():
    out = io.StringIO()
    err = io.StringIO()
    interpreter = Interpreter(ErrorReporter(err), out=out)
    source = 'var help = 3;\nhelp;\nhelp + 1;\nvar exit = 1;\nexit = 2;\n\nprint "still here";\n  exit  \nprint "never";\n'
    shell = Shell(interpreter, stdin=io.StringIO(source), stdout=io.StringIO())
    shell.use_rawinput = False
    shell.cmdloop()
    assert out.getvalue().splitlines() == ['3', '4', '2', 'still here']
    assert err.getvalue() == ''
