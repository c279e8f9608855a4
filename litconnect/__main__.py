"""
Entry point for running LitConnect as a module.

Usage:
    python -m litconnect --help
    python -m litconnect books --genre poetry
    python -m litconnect translate --text "Hola mundo" --source es
"""
from .cli import app


if __name__ == "__main__":
    app()
