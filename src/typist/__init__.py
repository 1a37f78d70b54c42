"""typist: a terminal typing-speed test."""

__version__ = "0.3.0"
