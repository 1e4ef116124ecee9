import enum
import errno
import os
import select

from myshell import signals
from myshell.config import MAX_LINE


class ReadStatus(enum.Enum):
    LINE = "line"
    INTERRUPTED = "interrupted"
    EOF = "eof"
    ERROR = "error"


class LineReader:
    """
    Blocking line reader on a raw file descriptor.

    Waits on the input fd and on the signal wake-up fd at the same time, so
    that Ctrl+C at an idle prompt returns INTERRUPTED instead of leaving the
    read blocked. Lines never exceed max_line bytes.
    """

    def __init__(self, fd, wakeup_fd=None, max_line=MAX_LINE):
        self.fd = fd
        self.wakeup_fd = wakeup_fd
        self.max_line = max_line
        self.error = None
        self._buffer = bytearray()
        self._eof = False
        self._discarding = False

    def read_line(self):
        """
        Returns (status, line). line is only set when status is LINE and
        never includes the trailing newline.
        """
        self.error = None
        while True:
            status, line = self._take_line()
            if status is not None:
                return status, line

            if self._eof:
                return ReadStatus.EOF, None

            try:
                ready = self._wait()
            except OSError as e:
                self.error = e
                return ReadStatus.ERROR, None

            if self.wakeup_fd is not None and self.wakeup_fd in ready:
                signals.drain_wakeup(self.wakeup_fd)
                if signals.interrupt_pending():
                    return ReadStatus.INTERRUPTED, None

            if self.fd in ready:
                try:
                    chunk = os.read(self.fd, 65536)
                except InterruptedError:
                    continue
                except OSError as e:
                    self.error = e
                    self._eof = True
                    return ReadStatus.ERROR, None
                if not chunk:
                    self._eof = True
                else:
                    self._buffer += chunk

    def _wait(self):
        fds = [self.fd]
        if self.wakeup_fd is not None:
            fds.append(self.wakeup_fd)
        ready, _, _ = select.select(fds, [], [])
        return ready

    def _take_line(self):
        newline = self._buffer.find(b"\n")

        if self._discarding:
            if newline < 0:
                self._buffer.clear()
                if not self._eof:
                    return None, None
            else:
                del self._buffer[:newline + 1]
            self._discarding = False
            self.error = OSError(errno.E2BIG, "input line too long")
            return ReadStatus.ERROR, None

        if newline < 0:
            if len(self._buffer) > self.max_line:
                # Keep dropping bytes until the end of this line shows up
                self._buffer.clear()
                self._discarding = True
                return None, None
            if self._eof and self._buffer:
                raw = bytes(self._buffer)
                self._buffer.clear()
                return ReadStatus.LINE, raw.decode("utf-8", errors="replace")
            return None, None

        raw = bytes(self._buffer[:newline])
        del self._buffer[:newline + 1]
        if len(raw) > self.max_line:
            self.error = OSError(errno.E2BIG, "input line too long")
            return ReadStatus.ERROR, None
        return ReadStatus.LINE, raw.decode("utf-8", errors="replace")
