import os
import signal

# Set only by handle_sigint, cleared only by the main loop.
sigint_received = False

_wakeup_fds = None
_previous_handler = None
_previous_wakeup_fd = -1


def handle_sigint(signum, frame):
    """Ctrl+C: remember it, never terminate the shell"""
    global sigint_received
    sigint_received = True


def interrupt_pending():
    return sigint_received


def consume_interrupt():
    """
    Read-and-clear checkpoint used once per loop iteration.
    Returns True if an interrupt arrived since the last call.
    """
    global sigint_received
    if not sigint_received:
        return False
    sigint_received = False
    return True


def install():
    """
    Install the SIGINT handler and the wake-up pipe.
    Returns the read end of the pipe, which becomes readable whenever a
    signal arrives so that a blocked select() returns early.
    Raises OSError / ValueError when the handler cannot be installed.
    """
    global _wakeup_fds, _previous_handler, _previous_wakeup_fd

    if _wakeup_fds is not None:
        return _wakeup_fds[0]

    read_fd, write_fd = os.pipe()
    os.set_blocking(read_fd, False)
    os.set_blocking(write_fd, False)
    try:
        _previous_handler = signal.signal(signal.SIGINT, handle_sigint)
        # Blocking system calls must fail with EINTR instead of restarting
        signal.siginterrupt(signal.SIGINT, True)
        _previous_wakeup_fd = signal.set_wakeup_fd(write_fd, warn_on_full_buffer=False)
    except (OSError, ValueError):
        if _previous_handler is not None:
            signal.signal(signal.SIGINT, _previous_handler)
            _previous_handler = None
        os.close(read_fd)
        os.close(write_fd)
        raise

    _wakeup_fds = (read_fd, write_fd)
    return read_fd


def restore():
    """Undo install(): previous handler, previous wake-up fd, close the pipe"""
    global _wakeup_fds, _previous_handler, _previous_wakeup_fd, sigint_received

    if _wakeup_fds is None:
        return

    signal.set_wakeup_fd(_previous_wakeup_fd)
    signal.signal(signal.SIGINT, _previous_handler or signal.default_int_handler)
    for fd in _wakeup_fds:
        os.close(fd)

    _wakeup_fds = None
    _previous_handler = None
    _previous_wakeup_fd = -1
    sigint_received = False


def drain_wakeup(fd):
    """Discard pending wake-up bytes"""
    while True:
        try:
            if not os.read(fd, 512):
                return
        except BlockingIOError:
            return


def ignore_terminal_output_stops():
    """Interactive shells ignore SIGTTOU so they can reclaim the terminal"""
    signal.signal(signal.SIGTTOU, signal.SIG_IGN)


def reset_child_signals():
    """Default dispositions for a child that is about to exec"""
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGTTOU, signal.SIG_DFL)
    signal.pthread_sigmask(signal.SIG_SETMASK, set())
