"""Address codec: canonical ``host:port`` keys."""

from .address_codec import encode, address_from_dict

__all__ = ["encode", "address_from_dict"]
