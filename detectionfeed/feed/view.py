"""Detection feed view model.

build_feed_view() combines a FetchState with an ExpansionSet into plain
data the presentation layer renders: a warning notice when the load
failed, a loading flag, and either the detection rows or an empty-state
message. render_text() is the plain-text presentation used by the CLI.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from detectionfeed.feed.expansion import ExpansionSet
from detectionfeed.feed.process_tree import ProcessNode, build_process_chain, render_process_chain
from detectionfeed.feed.severity import SeverityLabel, severity_label
from detectionfeed.feed.shaping import Empty, empty_or_populated, format_timestamp
from detectionfeed.models.alerts import AlertRecord
from detectionfeed.models.state import FetchState

FEED_TITLE = "Recent detections"
NOTICE_TITLE = "Something went wrong"
EMPTY_TITLE = "No recent detections"
EMPTY_BODY = "The Falcon sensor has not detected any malicious or suspicious behavior on this host."


@dataclass(frozen=True)
class Notice:
    title: str
    message: str
    variant: str = "warning"


@dataclass(frozen=True)
class EmptyMessage:
    title: str = EMPTY_TITLE
    body: str = EMPTY_BODY


@dataclass(frozen=True)
class DetectionDetails:
    technique: str
    disposition: str
    process_chain: list[ProcessNode] = field(default_factory=list)


@dataclass(frozen=True)
class DetectionRow:
    composite_id: str
    description: str
    tactic: str
    severity: SeverityLabel
    timestamp: str
    details_link: str | None
    expanded: bool
    details: DetectionDetails | None = None  # only built for expanded rows


@dataclass(frozen=True)
class FeedView:
    title: str = FEED_TITLE
    loading: bool = False
    notice: Notice | None = None
    rows: list[DetectionRow] = field(default_factory=list)
    empty: EmptyMessage | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_row(alert: AlertRecord, expansion: ExpansionSet) -> DetectionRow:
    expanded = expansion.is_expanded(alert.composite_id)
    details = None
    if expanded:
        details = DetectionDetails(
            technique=alert.technique,
            disposition=alert.pattern_disposition_description,
            process_chain=build_process_chain(alert),
        )
    return DetectionRow(
        composite_id=alert.composite_id,
        description=alert.description,
        tactic=alert.tactic,
        severity=severity_label(alert.severity_name),
        timestamp=format_timestamp(alert.timestamp),
        details_link=alert.details_link,
        expanded=expanded,
        details=details,
    )


def build_feed_view(state: FetchState, expansion: ExpansionSet) -> FeedView:
    """Compose the renderable feed for *state* and *expansion*."""
    notice = None
    if state.is_failed:
        notice = Notice(title=NOTICE_TITLE, message=state.error_message or "")

    if not state.is_ready:
        return FeedView(loading=state.is_loading, notice=notice)

    content = empty_or_populated(state.records, state.error_message)
    if isinstance(content, Empty):
        return FeedView(empty=EmptyMessage())
    return FeedView(rows=[build_row(alert, expansion) for alert in content.records])


def render_text(view: FeedView) -> str:
    lines = [view.title, "=" * len(view.title)]
    if view.notice is not None:
        lines.append(f"[{view.notice.variant.upper()}] {view.notice.title}: {view.notice.message}")
    if view.loading:
        lines.append("Loading...")
    if view.empty is not None:
        lines.extend([view.empty.title, view.empty.body])

    for row in view.rows:
        marker = "[-]" if row.expanded else "[+]"
        lines.append(f"{marker} {row.description} | {row.tactic} | {row.severity.text} | {row.timestamp}")
        if row.details_link:
            lines.append(f"    Details: {row.details_link}")
        if row.details is None:
            continue
        lines.append(f"    Technique:    {row.details.technique}")
        lines.append(f"    Disposition:  {row.details.disposition}")
        lines.append("    Process tree:")
        chain = render_process_chain(row.details.process_chain)
        lines.extend(f"      {line}" for line in chain or ["<none>"])
    return "\n".join(lines)
