"""myshell: a small interactive command interpreter."""

__version__ = "1.0.0"
