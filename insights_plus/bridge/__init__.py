"""Bridge package for insights-plus.

Boundary helpers that wait for chart markup and hand results across an
execution-context boundary. None of the extraction or forecast code waits.
"""
from .channel import SingleShotChannel
from .poller import poll_for_chart, wait_for_container

__all__ = [
    "SingleShotChannel",
    "poll_for_chart",
    "wait_for_container",
]
