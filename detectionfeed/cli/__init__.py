"""detectionfeed command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``detectionfeed`` script).
"""

from detectionfeed.cli.main import cli

__all__ = ["cli"]
