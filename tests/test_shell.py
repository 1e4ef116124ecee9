import os
import signal

import pytest

from myshell import config, shell, signals
from myshell.reader import LineReader


def run_session(make_reader, data, **kwargs):
    reader = make_reader(data, **kwargs)
    shell.main_loop(reader, prompt=lambda: "$ ")


def test_blank_lines_just_reprompt(make_reader, capsys):
    run_session(make_reader, b"\n   \n\t\n")
    assert capsys.readouterr().out == "$ $ $ $ \n"


def test_builtin_runs_and_loop_continues(make_reader, capsys):
    run_session(make_reader, b"  echo   a   b \necho c\n")
    assert capsys.readouterr().out == "$ a b\n$ c\n$ \n"


@pytest.mark.parametrize("name", [b"quit", b"exit"])
def test_quit_and_exit_stop_the_loop(make_reader, capsys, name):
    with pytest.raises(SystemExit) as excinfo:
        run_session(make_reader, name + b"\necho never\n")
    assert excinfo.value.code == 0
    assert "never" not in capsys.readouterr().out


def test_usage_error_does_not_stop_the_loop(make_reader, capsys, monkeypatch):
    changed = []
    monkeypatch.setattr("myshell.builtin.change_directory", changed.append)

    run_session(make_reader, b"cd a b\necho after\n")

    out = capsys.readouterr().out
    assert "too many arguments" in out
    assert "after" in out
    assert changed == []


def test_missing_program_reports_and_continues(make_reader, capsys):
    run_session(make_reader, b"nonexistent-cmd-for-myshell-tests\necho after\n")

    out = capsys.readouterr().out
    assert "Exit status: 127" in out
    assert out.endswith("$ after\n$ \n")


def test_run_line_returns_external_exit_code():
    assert shell.run_line("false") == 1
    assert shell.run_line("true") == 0


def test_nul_byte_in_cd_does_not_kill_the_loop(make_reader, capsys):
    run_session(make_reader, b"cd a\x00b\necho after\n")

    captured = capsys.readouterr()
    assert "cd:" in captured.err
    assert "after" in captured.out


def test_nul_byte_in_dir_does_not_kill_the_loop(make_reader, capsys):
    run_session(make_reader, b"dir a\x00b\necho after\n")

    captured = capsys.readouterr()
    assert "dir:" in captured.err
    assert "after" in captured.out


def test_interrupt_gives_exactly_one_blank_line(sigint_installed, make_reader, capsys):
    reader = make_reader(b"echo hi\n", wakeup_fd=sigint_installed)
    os.kill(os.getpid(), signal.SIGINT)

    shell.main_loop(reader, prompt=lambda: "$ ")

    assert capsys.readouterr().out == "\n$ hi\n$ \n"
    assert not signals.interrupt_pending()


def test_too_long_line_is_skipped(make_reader, capsys):
    run_session(make_reader, b"echo aaaaaaaaaaaa\necho ok\n", max_line=8)

    captured = capsys.readouterr()
    assert "input line too long" in captured.err
    assert "ok" in captured.out


def test_trace_echoes_command_and_args(make_reader, capsys, monkeypatch):
    monkeypatch.setattr(config, "TRACE_COMMANDS", True)
    run_session(make_reader, b"echo a b\n")

    out = capsys.readouterr().out
    assert "Command: echo\nArg: a\nArg: b\na b\n" in out


def test_run_line_blank_returns_none():
    assert shell.run_line("   ") is None


def test_main_aborts_when_handler_cannot_be_installed(monkeypatch, capsys):
    def fail():
        raise OSError("no signals here")

    monkeypatch.setattr(signals, "install", fail)
    assert shell.main() == 1
    assert "sigaction" in capsys.readouterr().err


def test_main_runs_until_end_of_input(monkeypatch, capsys):
    read_fd, write_fd = os.pipe()
    os.write(write_fd, b"echo from-main\n")
    os.close(write_fd)

    class FakeStdin:
        def fileno(self):
            return read_fd

    monkeypatch.setattr("sys.stdin", FakeStdin())
    try:
        assert shell.main() == 0
    finally:
        os.close(read_fd)
    assert "from-main" in capsys.readouterr().out
