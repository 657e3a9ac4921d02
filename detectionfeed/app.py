"""Application bootstrap for detectionfeed.

Wires components in dependency order for a one-shot feed load:
config → logging → alert service → controller → load.

A service built here is owned here and closed once the load settles;
an injected service is left open for its owner.
"""

from __future__ import annotations

from detectionfeed.config import load_config
from detectionfeed.feed.controller import FetchController
from detectionfeed.models.config import DetectionFeedConfig
from detectionfeed.observability.logging import get_logger, setup_logging
from detectionfeed.service import build_alert_service
from detectionfeed.service.base import AlertService


async def run_feed(
    device_id: str,
    config: DetectionFeedConfig | None = None,
    service: AlertService | None = None,
) -> FetchController:
    """Load the detection feed for *device_id* once and return the controller.

    The returned controller is in READY or FAILED; failures are carried in
    its state, never raised.
    """
    if config is None:
        config = load_config()
    setup_logging(config.log.level, config.log.format)
    log = get_logger("app")
    log.info("detectionfeed starting", version=_detectionfeed_version(), device_id=device_id)

    controller = FetchController()
    if service is not None:
        await controller.load(service, device_id)
    else:
        async with build_alert_service(config.service) as owned:
            await controller.load(owned, device_id)

    log.info(
        "detectionfeed finished",
        phase=controller.state.phase.value,
        count=len(controller.state.records),
    )
    return controller


def _detectionfeed_version() -> str:
    from detectionfeed import __version__

    return __version__
