"""Allow running as python -m releasegit."""

from releasegit.cli import cli

if __name__ == "__main__":
    cli()
