import os

import pytest

from myshell import signals
from myshell.reader import LineReader


@pytest.fixture(autouse=True)
def clean_signals():
    yield
    signals.restore()
    signals.sigint_received = False


@pytest.fixture
def sigint_installed():
    """SIGINT handler + wake-up pipe, as installed at shell startup"""
    return signals.install()


@pytest.fixture
def make_reader():
    """Build a LineReader over a pipe pre-filled with data"""
    opened = []

    def factory(data, wakeup_fd=None, max_line=4096, close=True):
        read_fd, write_fd = os.pipe()
        opened.append(read_fd)
        os.write(write_fd, data)
        if close:
            os.close(write_fd)
        else:
            opened.append(write_fd)
        return LineReader(read_fd, wakeup_fd=wakeup_fd, max_line=max_line)

    yield factory

    for fd in opened:
        os.close(fd)
