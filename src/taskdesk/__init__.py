"""taskdesk: console client for a personal task list kept on a remote API."""

__version__ = "0.1.0"
