import os
import sys

from myshell.config import CLEAR_SCREEN, PROGRAM_NAME
from myshell.parser import join_args
from myshell.reader import ReadStatus

USAGE_ERROR = 2


def builtin_help():
    """Print help message"""
    print(f"""{PROGRAM_NAME} help:
 Built-in commands:
  cd [dir]      : change directory (default: $HOME)
  pwd           : print the current directory
  dir [path]    : list files in path (default: current directory)
  echo [text]   : print text, arguments separated by one space
  environ       : list environment variables
  clr           : clear the screen
  pause         : wait until Enter is pressed
  help          : print this help
  quit, exit    : exit shell

Any other command is run as an external program in its own process group.
Ctrl+C at the prompt gives a fresh prompt, it never exits the shell.
""")


def change_directory(path):
    """Change directory"""
    try:
        os.chdir(path)
        return 0
    except (OSError, ValueError) as e:
        print(f"{PROGRAM_NAME}: cd: {path}: {getattr(e, 'strerror', None) or e}", file=sys.stderr)
        return 1


def print_working_directory():
    try:
        print(os.getcwd())
        return 0
    except OSError as e:
        print(f"{PROGRAM_NAME}: pwd: {e.strerror}", file=sys.stderr)
        return 1


def list_files(path):
    """List directory entries, directories marked with /"""
    try:
        names = sorted(os.listdir(path))
    except (OSError, ValueError) as e:
        print(f"{PROGRAM_NAME}: dir: {path}: {getattr(e, 'strerror', None) or e}", file=sys.stderr)
        return 1

    for name in names:
        if os.path.isdir(os.path.join(path, name)):
            print(f"{name}/")
        else:
            print(name)
    return 0


def list_environ():
    for key, value in os.environ.items():
        print(f"{key}={value}")
    return 0


def echo(text):
    print(text)
    return 0


def clear_screen():
    sys.stdout.write(CLEAR_SCREEN)
    sys.stdout.flush()
    return 0


def pause_shell(reader):
    """Block until the user presses Enter (or Ctrl+C)"""
    print("Press Enter to continue...", end="", flush=True)
    status, _ = reader.read_line()
    if status is ReadStatus.EOF:
        print()
    return 0


def quit_shell():
    raise SystemExit(0)


def home_directory():
    return os.environ.get("HOME") or os.path.expanduser("~")


# ---------- Argument policies ----------
def _usage(text):
    print(f"Usage: {text}")
    return USAGE_ERROR


def _no_args(name, action):
    def run(args, reader):
        if args:
            return _usage(name)
        return action()
    return run


def _cmd_cd(args, reader):
    if len(args) > 1:
        print(f"{PROGRAM_NAME}: cd: too many arguments")
        return USAGE_ERROR
    if not args:
        return change_directory(home_directory())
    return change_directory(args[0])


def _cmd_dir(args, reader):
    if len(args) > 1:
        return _usage("dir [path]")
    return list_files(args[0] if args else os.curdir)


def _cmd_echo(args, reader):
    try:
        text = join_args(args)
    except MemoryError:
        print("Error concatenating args for echo", file=sys.stderr)
        return 1
    return echo(text)


def _cmd_pause(args, reader):
    if args:
        return _usage("pause")
    return pause_shell(reader)


def _cmd_quit(args, reader):
    return quit_shell()


# Exact, case-sensitive names
builtins = {
    'cd': _cmd_cd,
    'quit': _cmd_quit,
    'exit': _cmd_quit,
    'clr': _no_args('clr', lambda: clear_screen()),
    'environ': _no_args('environ', lambda: list_environ()),
    'dir': _cmd_dir,
    'echo': _cmd_echo,
    'pwd': _no_args('pwd', lambda: print_working_directory()),
    'help': _no_args('help', lambda: builtin_help()),
    'pause': _cmd_pause,
}


def execute_builtin(command, reader=None):
    """
    Execute built-in command if it matches.
    Returns (executed: bool, exit_code: int)
    """
    handler = builtins.get(command.name)
    if handler is None:
        return False, 0
    return True, handler(command.args, reader)
