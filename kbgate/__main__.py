"""Run kbgate as a module."""

from kbgate.cli.commands import app


def main() -> None:
    """Entrypoint for `python -m kbgate`."""
    app()


if __name__ == "__main__":
    main()
