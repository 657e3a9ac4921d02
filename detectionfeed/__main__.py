"""Entry point for `python -m detectionfeed`.

Usage:
    python -m detectionfeed show <device-id>
    uv run python -m detectionfeed show <device-id> --json
"""

from __future__ import annotations

from detectionfeed.cli import cli

cli()
