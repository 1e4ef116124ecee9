import errno
import os
import sys

from myshell import config, signals
from myshell.builtin import execute_builtin
from myshell.executor import run_external
from myshell.parser import parse_command
from myshell.prompt import get_prompt
from myshell.reader import LineReader, ReadStatus


def trace_command(command):
    print(f"Command: {command.name}")
    for arg in command.args:
        print(f"Arg: {arg}")


def run_line(line, reader=None):
    """
    Tokenize and dispatch one input line.
    Returns the exit code, or None when the line held no command.
    """
    try:
        command = parse_command(line)
    except ValueError as e:
        print(f"{config.PROGRAM_NAME}: {e}", file=sys.stderr)
        return 1
    if command is None:
        return None

    if config.TRACE_COMMANDS:
        trace_command(command)

    # Built-ins
    executed, exit_code = execute_builtin(command, reader)
    if executed:
        return exit_code

    # External program
    outcome = run_external(command.argv)
    if outcome is None:
        return 1
    return outcome.exit_code


def main_loop(reader, prompt=get_prompt):
    """Main shell loop. Returns when input ends; quit/exit raise SystemExit."""
    while True:
        # Only checkpoint for the interrupt flag
        if signals.consume_interrupt():
            print()
            continue

        print(prompt(), end="", flush=True)

        status, line = reader.read_line()
        if status is ReadStatus.INTERRUPTED:
            continue
        if status is ReadStatus.EOF:
            print()
            break
        if status is ReadStatus.ERROR:
            reason = getattr(reader.error, "strerror", None) or reader.error
            print(f"{config.PROGRAM_NAME}: read error: {reason}", file=sys.stderr)
            if getattr(reader.error, "errno", None) == errno.E2BIG:
                continue
            break

        run_line(line, reader)


def main():
    try:
        wakeup_fd = signals.install()
    except (OSError, ValueError) as e:
        print(f"{config.PROGRAM_NAME}: sigaction: {e}", file=sys.stderr)
        return 1

    stdin_fd = sys.stdin.fileno()
    if os.isatty(stdin_fd):
        signals.ignore_terminal_output_stops()

    reader = LineReader(stdin_fd, wakeup_fd, config.MAX_LINE)
    try:
        main_loop(reader)
    finally:
        signals.restore()
    return 0


if __name__ == "__main__":
    sys.exit(main())
