"""tasktrack: single-user task tracker with debounced search and pending-task notifications."""

__version__ = "0.1.0"
