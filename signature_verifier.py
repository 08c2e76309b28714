import binascii
import logging
from enum import Enum
from hashlib import sha256

from coincurve.ecdsa import cdata_to_der, deserialize_compact
from coincurve.keys import PublicKey

from config import (
    SIGNATURE_COMPONENT_HEX_LENGTH,
    UNCOMPRESSED_PUBLIC_KEY_HEX_LENGTH,
    UNCOMPRESSED_PUBLIC_KEY_PREFIX,
)

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    INVALID_PUBLIC_KEY_LENGTH = "InvalidPublicKeyLength"
    INVALID_SIGNATURE_COMPONENT_LENGTH = "InvalidSignatureComponentLength"
    INVALID_HEX_ENCODING = "InvalidHexEncoding"
    INVALID_PUBLIC_KEY_POINT = "InvalidPublicKeyPoint"


# --- Error Taxonomy ---
class VerificationError(ValueError):
    """Malformed input detected before or during signature verification.

    ``kind`` is the discriminant; ``context`` holds the structured details
    (field names, expected and actual lengths) that went into the message.
    """

    kind = None

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.context = context


class InvalidPublicKeyLength(VerificationError):
    kind = ErrorKind.INVALID_PUBLIC_KEY_LENGTH

    def __init__(self, actual: int, expected: int = UNCOMPRESSED_PUBLIC_KEY_HEX_LENGTH):
        super().__init__(
            f"Invalid uncompressed public key length. Required len: {expected}",
            expected=expected,
            actual=actual,
        )


class InvalidSignatureComponentLength(VerificationError):
    kind = ErrorKind.INVALID_SIGNATURE_COMPONENT_LENGTH

    def __init__(
        self, field: str, actual: int, expected: int = SIGNATURE_COMPONENT_HEX_LENGTH
    ):
        super().__init__(
            f"Invalid signature {field} length. Max len: {expected}, got: {actual}",
            field=field,
            expected=expected,
            actual=actual,
        )


class InvalidHexEncoding(VerificationError):
    kind = ErrorKind.INVALID_HEX_ENCODING

    def __init__(self, field: str):
        super().__init__(f"Invalid hex encoding for {field}.", field=field)


class InvalidPublicKeyPoint(VerificationError):
    kind = ErrorKind.INVALID_PUBLIC_KEY_POINT

    def __init__(self, reason: str):
        super().__init__(
            f"Public key is not a valid uncompressed secp256k1 point: {reason}",
            reason=reason,
        )


# --- Input Normalization ---
def strip_hex_prefix(value: str) -> str:
    """Drop a single leading ``0x``/``0X``; digit case is left untouched."""
    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def pad_signature_component(value: str) -> str:
    # Oversized values pass through; the length check rejects them later.
    return value.rjust(SIGNATURE_COMPONENT_HEX_LENGTH, "0")


def decode_hex(value: str, field: str) -> bytes:
    # unhexlify is strict: no whitespace, no odd lengths.
    try:
        return binascii.unhexlify(value)
    except ValueError as e:
        raise InvalidHexEncoding(field) from e


def load_public_key(public_key_hex: str) -> PublicKey:
    """
    Normalizes, length-checks and parses an uncompressed public key.
    Shared by verification and address derivation.
    """
    public_key_hex = strip_hex_prefix(public_key_hex)
    if len(public_key_hex) != UNCOMPRESSED_PUBLIC_KEY_HEX_LENGTH:
        raise InvalidPublicKeyLength(len(public_key_hex))
    return parse_public_key(decode_hex(public_key_hex, "public key"))


def parse_public_key(public_key_bytes: bytes) -> PublicKey:
    if public_key_bytes[0] != UNCOMPRESSED_PUBLIC_KEY_PREFIX:
        raise InvalidPublicKeyPoint(
            f"expected prefix 0x{UNCOMPRESSED_PUBLIC_KEY_PREFIX:02x}, "
            f"got 0x{public_key_bytes[0]:02x}"
        )
    try:
        return PublicKey(public_key_bytes)
    except ValueError as e:
        raise InvalidPublicKeyPoint("point is not on the curve") from e


# --- ECDSA Signature Verification Function ---
def verify_signature(
    public_key_hex: str,
    signature_r_hex: str,
    signature_s_hex: str,
    message: str,
) -> bool:
    """
    Verifies an ECDSA secp256k1 signature (R, S) over sha256(message).

    Returns False for a well-formed signature that does not verify, including
    zero or out-of-range scalars and high-S signatures (libsecp256k1 only
    accepts lower-S). Malformed input raises a VerificationError subclass.
    """
    public_key_hex = strip_hex_prefix(public_key_hex)
    signature_r_hex = pad_signature_component(strip_hex_prefix(signature_r_hex))
    signature_s_hex = pad_signature_component(strip_hex_prefix(signature_s_hex))

    # 1. Structural checks
    if len(public_key_hex) != UNCOMPRESSED_PUBLIC_KEY_HEX_LENGTH:
        logger.debug("Rejected public key of %d hex chars", len(public_key_hex))
        raise InvalidPublicKeyLength(len(public_key_hex))
    for field, value in (("R", signature_r_hex), ("S", signature_s_hex)):
        if len(value) > SIGNATURE_COMPONENT_HEX_LENGTH:
            logger.debug("Rejected signature %s of %d hex chars", field, len(value))
            raise InvalidSignatureComponentLength(field, len(value))

    # 2. Decode
    public_key_bytes = decode_hex(public_key_hex, "public key")
    signature_bytes = decode_hex(signature_r_hex, "signature R") + decode_hex(
        signature_s_hex, "signature S"
    )
    message_hash = sha256(message.encode("utf-8")).digest()

    # 3. Verify
    public_key = parse_public_key(public_key_bytes)
    try:
        der_signature = cdata_to_der(deserialize_compact(signature_bytes))
        verified = public_key.verify(der_signature, message_hash, hasher=None)
    except ValueError:
        # R or S >= curve order
        logger.debug("Signature scalars could not be parsed for the curve order")
        return False

    logger.debug("Signature verification result: %s", verified)
    return verified
