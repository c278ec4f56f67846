"""CLI and client library for the EasyRedir redirect management API."""

__version__ = "0.1.0"
