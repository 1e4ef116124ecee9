from collections import namedtuple

from myshell.config import MAX_LINE


class Command(namedtuple("Command", ["name", "args"])):
    """One tokenized input line: command name plus its arguments"""

    __slots__ = ()

    @property
    def argv(self):
        return [self.name] + list(self.args)


def tokenize(line):
    """
    Split on runs of whitespace. No quoting, no escapes:
    a token is always a maximal run of non-whitespace characters.
    """
    return line.strip().split()


def parse_command(line, max_tokens=MAX_LINE):
    """
    Parse a raw line into a Command.
    Returns None for blank input.
    """
    tokens = tokenize(line)
    if not tokens:
        return None
    if len(tokens) > max_tokens:
        raise ValueError(f"too many arguments ({len(tokens)} > {max_tokens})")
    return Command(tokens[0], tuple(tokens[1:]))


def join_args(args):
    """Join arguments with single spaces (echo)"""
    return " ".join(args)
