# Canonical string keys for node addresses.
# The "host:port" key is the only identity used for nodes, edge endpoints
# and dedup membership.

from __future__ import annotations

from typing import Any, Mapping, Optional

from api.topology_api.errors import InvalidAddress, MalformedReport
from api.topology_api.model import Address

MAX_PORT = 65535
# Leading zeros are tolerated, unbounded digit strings are not
MAX_PORT_DIGITS = 10

# Older controllers send the host under "ip"
HOST_KEYS = ("host", "ip")


def encode(address: Address) -> str:
    _validate(address.host, address.port, address)
    return f"{address.host}:{address.port}"


def address_from_dict(raw: Any, position: Optional[int] = None, peer: Optional[int] = None) -> Address:
    """
    Read an address object from a report payload.

    Missing fields are a structural problem (MalformedReport); present but
    unusable values are an InvalidAddress. Both carry the record position.
    """
    if not isinstance(raw, Mapping):
        raise MalformedReport("address must be an object", position=position, peer=peer)

    host = None
    for key in HOST_KEYS:
        if raw.get(key) is not None:
            host = raw[key]
            break
    if host is None:
        raise MalformedReport("address lacks 'host'", position=position, peer=peer)

    if raw.get("port") is None:
        raise MalformedReport("address lacks 'port'", position=position, peer=peer)

    try:
        port = _coerce_port(raw["port"])
        _validate(host, port, raw)
    except InvalidAddress as exc:
        raise exc.at(position, peer) from None

    return Address(host=host, port=port)


def _coerce_port(value: Any) -> int:
    # bool is an int subclass, never a port
    if isinstance(value, bool):
        raise InvalidAddress("port must be an integer", value=value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        # isdigit() alone lets through superscripts and other non-ASCII digits
        if text.isascii() and text.isdigit() and len(text) <= MAX_PORT_DIGITS:
            return int(text)
        if text.isascii() and text.isdigit():
            raise InvalidAddress(f"port must be within 0..{MAX_PORT}", value=value)
    raise InvalidAddress("port must be an integer", value=value)


def _validate(host: Any, port: Any, value: Any) -> None:
    if not isinstance(host, str) or not host:
        raise InvalidAddress("host must be a non-empty string", value=value)
    if isinstance(port, bool) or not isinstance(port, int):
        raise InvalidAddress("port must be an integer", value=value)
    if not 0 <= port <= MAX_PORT:
        raise InvalidAddress(f"port must be within 0..{MAX_PORT}", value=value)
