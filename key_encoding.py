import logging
from hashlib import sha3_256

from config import (
    ADDRESS_BYTE_LENGTH,
    SIGNATURE_COMPONENT_BYTE_LENGTH,
    UNCOMPRESSED_PUBLIC_KEY_PREFIX,
)
from signature_verifier import load_public_key

logger = logging.getLogger(__name__)

COORDINATE_BYTE_LENGTH = SIGNATURE_COMPONENT_BYTE_LENGTH


def uncompressed_public_key_hex(x: int, y: int) -> str:
    """
    Encodes curve coordinates as an uncompressed public key (04 || X || Y).
    Args:
        x (int): X coordinate
        y (int): Y coordinate
    Returns:
        str: 130-char lowercase hex, no 0x prefix
    """
    for name, value in (("x", x), ("y", y)):
        if value < 0 or value.bit_length() > COORDINATE_BYTE_LENGTH * 8:
            raise ValueError(
                f"Coordinate {name} must fit in {COORDINATE_BYTE_LENGTH} unsigned bytes."
            )
    public_key_bytes = (
        bytes([UNCOMPRESSED_PUBLIC_KEY_PREFIX])
        + x.to_bytes(COORDINATE_BYTE_LENGTH, "big")
        + y.to_bytes(COORDINATE_BYTE_LENGTH, "big")
    )
    return public_key_bytes.hex()


def public_key_address(public_key_hex: str) -> str:
    """
    Derives a 20-byte address from an uncompressed public key.

    The address is the tail of SHA3-256 (FIPS 202) over all 65 key bytes,
    prefix included. This is NOT an Ethereum address, which uses Keccak-256
    over the 64 coordinate bytes.
    """
    public_key = load_public_key(public_key_hex)
    digest = sha3_256(public_key.format(compressed=False)).digest()
    address = "0x" + digest[-ADDRESS_BYTE_LENGTH:].hex()
    logger.debug("Derived address %s", address)
    return address
