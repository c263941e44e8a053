"""Request echo service: query params, headers and active scopes as JSON."""

__version__ = "0.1.0"
