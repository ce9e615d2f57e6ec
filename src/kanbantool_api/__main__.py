"""Allow running the CLI with `python -m kanbantool_api`."""

from kanbantool_api.cli import run

if __name__ == "__main__":
    run()
