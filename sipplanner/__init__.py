"""SIP planner: systematic investment plan math behind a small Flask API."""

__version__ = "0.1.0"
