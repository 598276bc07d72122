"""Module entrypoint for ``python -m dms_api``."""

from dms_api.cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
