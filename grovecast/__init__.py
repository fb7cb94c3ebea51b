"""Grovecast - turn a queue of articles into a narrated podcast episode."""

__version__ = "0.1.0"
