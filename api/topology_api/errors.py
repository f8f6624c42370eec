"""Error taxonomy for topology ingestion."""

from __future__ import annotations

from typing import Any, Optional


class TopologyError(Exception):
    """Base class for every error raised while building a topology graph."""


def _describe_position(position: Optional[int], peer: Optional[int]) -> str:
    if position is None:
        return "report"
    if peer is None:
        return f"nodes[{position}]"
    return f"nodes[{position}].peers[{peer}]"


class MalformedReport(TopologyError, ValueError):
    """The report is missing a required structural field."""

    def __init__(self, message: str, position: Optional[int] = None, peer: Optional[int] = None):
        self.position = position
        self.peer = peer
        self.reason = message
        super().__init__(f"Malformed topology report at {_describe_position(position, peer)}: {message}")


class InvalidAddress(TopologyError, ValueError):
    """An address has an empty host or a port outside [0, 65535]."""

    def __init__(self, message: str, value: Any = None,
                 position: Optional[int] = None, peer: Optional[int] = None):
        self.value = value
        self.position = position
        self.peer = peer
        self.reason = message
        if position is None:
            text = f"Invalid address {value!r}: {message}"
        else:
            text = f"Invalid address {value!r} at {_describe_position(position, peer)}: {message}"
        super().__init__(text)

    def at(self, position: Optional[int], peer: Optional[int] = None) -> "InvalidAddress":
        # Same error, re-anchored on the record that carried it
        return InvalidAddress(self.reason, value=self.value, position=position, peer=peer)


class ReportFetchError(TopologyError):
    """The control node could not be reached or answered with garbage."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)
