from lesschanged.cli.main import cli

__all__ = ["cli"]
