"""
linear-cli Package Main Entry Point

Runs the CLI when the package is executed with ``python -m linear_cli``.
"""

from linear_cli.cli.typer_app import app

if __name__ == "__main__":
    app()
