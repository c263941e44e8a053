"""CLI entry point for the API service."""

from .main import run

if __name__ == "__main__":  # pragma: no cover - script entry
    run()
