"""Process ancestry chain for an alert.

Shows the offending process and its parent and grandparent (if any). The
chain is ordered oldest ancestor first, so the offending process is always
the last node.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from detectionfeed.models.alerts import AlertRecord, ProcessInfo


class ProcessRole(StrEnum):
    GRANDPARENT = "grandparent"
    PARENT = "parent"
    OFFENDING = "offending"


@dataclass(frozen=True)
class ProcessNode:
    role: ProcessRole
    filename: str
    cmdline: str
    depth: int


def build_process_chain(alert: AlertRecord) -> list[ProcessNode]:
    """Return grandparent, parent and offending process, skipping absent ones."""
    candidates: list[tuple[ProcessRole, ProcessInfo | None]] = [
        (ProcessRole.GRANDPARENT, alert.grandparent),
        (ProcessRole.PARENT, alert.parent),
        (ProcessRole.OFFENDING, alert.process),
    ]
    chain: list[ProcessNode] = []
    for role, info in candidates:
        if info is None:
            continue
        chain.append(
            ProcessNode(
                role=role,
                filename=info.filename or _basename(info.filepath) or "<unknown>",
                cmdline=info.cmdline,
                depth=len(chain),
            )
        )
    return chain


def render_process_chain(chain: list[ProcessNode], indent: str = "  ") -> list[str]:
    """Render *chain* as indented text lines, one per process."""
    lines = []
    for node in chain:
        prefix = indent * node.depth + ("└─ " if node.depth else "")
        text = f"{prefix}{node.filename}"
        if node.cmdline:
            text = f"{text}  ({node.cmdline})"
        lines.append(text)
    return lines


def _basename(filepath: str) -> str:
    # Falcon reports Windows paths with backslashes.
    return filepath.replace("\\", "/").rsplit("/", 1)[-1]
