import os
import signal
import sys
from collections import namedtuple

from myshell import signals
from myshell.config import PROGRAM_NAME

ExitOutcome = namedtuple("ExitOutcome", ["terminated_normally", "exit_code", "signal"])

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126
EXIT_FAILURE = 1


def status_to_outcome(status):
    """Translate an os.waitpid status into an ExitOutcome"""
    if os.WIFEXITED(status):
        return ExitOutcome(True, os.WEXITSTATUS(status), None)
    if os.WIFSIGNALED(status):
        signum = os.WTERMSIG(status)
        return ExitOutcome(False, 128 + signum, signum)
    return ExitOutcome(False, EXIT_FAILURE, None)


def signal_name(signum):
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def report_outcome(outcome):
    if outcome.terminated_normally:
        if outcome.exit_code != 0:
            print(f"Exit status: {outcome.exit_code}")
    elif outcome.signal is not None:
        print(f"Terminated by signal {outcome.signal} ({signal_name(outcome.signal)})")


def terminal_fd():
    """stdin's fd if it is a terminal we can hand to the child, else None"""
    try:
        fd = sys.stdin.fileno()
    except (AttributeError, ValueError, OSError):
        return None
    return fd if os.isatty(fd) else None


def give_terminal_to(fd, pgid):
    """Make pgid the foreground group; SIGTTOU blocked so a background caller is allowed"""
    old_mask = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGTTOU})
    try:
        os.tcsetpgrp(fd, pgid)
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, old_mask)


def _child_error(what, err):
    print(f"{PROGRAM_NAME}: {what}: {err.strerror or err}", file=sys.stderr)


def _exec_child(argv, tty_fd):
    """
    Child side of fork(). Never returns:
    new process group -> default SIGINT -> exec.
    """
    code = EXIT_FAILURE
    try:
        try:
            os.setpgid(0, 0)
        except OSError as e:
            _child_error("setpgid failed", e)
            return

        if tty_fd is not None:
            try:
                give_terminal_to(tty_fd, os.getpid())
            except OSError as e:
                _child_error("tcsetpgrp failed", e)
                return

        try:
            signals.reset_child_signals()
        except (OSError, ValueError) as e:
            _child_error("signal error in child", e)
            return

        try:
            os.execvp(argv[0], argv)
        except FileNotFoundError:
            code = EXIT_NOT_FOUND
            print(f"{PROGRAM_NAME}: {argv[0]}: command not found", file=sys.stderr)
        except PermissionError:
            code = EXIT_NOT_EXECUTABLE
            print(f"{PROGRAM_NAME}: {argv[0]}: permission denied", file=sys.stderr)
        except ValueError as e:
            print(f"{PROGRAM_NAME}: execvp {argv[0]!r}: {e}", file=sys.stderr)
        except OSError as e:
            _child_error(f"execvp {argv[0]}", e)
    finally:
        try:
            sys.stdout.flush()
            sys.stderr.flush()
        finally:
            os._exit(code)


def run_external(argv):
    """
    Run an external program in its own process group and wait for it.
    Returns: ExitOutcome, or None if the attempt could not be made
    """
    tty_fd = terminal_fd()

    sys.stdout.flush()
    sys.stderr.flush()

    try:
        pid = os.fork()
    except OSError as e:
        print(f"{PROGRAM_NAME}: fork: {e.strerror}", file=sys.stderr)
        return None

    if pid == 0:
        _exec_child(argv, tty_fd)

    # Parent. Same setpgid as the child; whoever runs first wins
    try:
        os.setpgid(pid, pid)
    except OSError:
        pass
    if tty_fd is not None:
        try:
            give_terminal_to(tty_fd, pid)
        except OSError:
            pass

    try:
        _, status = os.waitpid(pid, 0)
    except ChildProcessError as e:
        print(f"{PROGRAM_NAME}: waitpid: {e.strerror}", file=sys.stderr)
        return None
    finally:
        if tty_fd is not None:
            try:
                give_terminal_to(tty_fd, os.getpgrp())
            except OSError as e:
                print(f"Warning: could not reclaim the terminal: {e.strerror}", file=sys.stderr)

    outcome = status_to_outcome(status)
    report_outcome(outcome)
    return outcome
