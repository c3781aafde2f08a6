"""Entry point for ``python -m tasktrack`` and the installed ``tasktrack`` script."""

from tasktrack.interfaces.cli import app


def main() -> None:
    app(prog_name="tasktrack")


if __name__ == "__main__":
    main()
