"""tasktrack - a personal task tracker with git branch integration."""

__version__ = "0.1.0"
