import os
import pwd
import socket
import sys

import psutil

from myshell.config import COLOR_BLUE_BOLD, COLOR_GREEN_BOLD, COLOR_RESET


def _username(proc):
    """Effective user, like getpwuid(geteuid())"""
    try:
        return pwd.getpwuid(proc.uids().effective).pw_name
    except (psutil.Error, KeyError, OSError):
        return None


def _hostname():
    try:
        return socket.gethostname() or None
    except OSError:
        return None


def _cwd():
    try:
        return os.getcwd()
    except OSError:
        return "?"


def get_prompt(color=None):
    """Generate shell prompt: (PID: n) user@host:cwd$ """
    if color is None:
        color = sys.stdout.isatty()

    def paint(code, text):
        return f"{code}{text}{COLOR_RESET}" if color else text

    proc = psutil.Process()
    user = _username(proc)
    host = _hostname()

    parts = [f"(PID: {proc.pid}) "]
    if user:
        parts.append(paint(COLOR_GREEN_BOLD, f"{user}@"))
    if host:
        parts.append(paint(COLOR_GREEN_BOLD, host))
    if user and host:
        parts.append(":")
    parts.append(paint(COLOR_BLUE_BOLD, _cwd()))
    parts.append("$ ")
    return "".join(parts)
