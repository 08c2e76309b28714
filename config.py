# config.py
import logging
import os

# --- Tool Metadata ---
VERSION = "1.1.0"

# --- Public Key Format ---
# Uncompressed secp256k1 point: 0x04 prefix + 32-byte X + 32-byte Y.
UNCOMPRESSED_PUBLIC_KEY_PREFIX = 0x04
UNCOMPRESSED_PUBLIC_KEY_BYTE_LENGTH = 65
UNCOMPRESSED_PUBLIC_KEY_HEX_LENGTH = UNCOMPRESSED_PUBLIC_KEY_BYTE_LENGTH * 2  # 130

# --- Signature Format ---
# R and S are each a 32-byte scalar; the verifier consumes R || S (64 bytes).
SIGNATURE_COMPONENT_BYTE_LENGTH = 32
SIGNATURE_COMPONENT_HEX_LENGTH = SIGNATURE_COMPONENT_BYTE_LENGTH * 2  # 64

# --- Address Derivation ---
# Trailing bytes of the SHA3-256 digest of the uncompressed key.
ADDRESS_BYTE_LENGTH = 20

# --- Logging ---
# Logs go to stderr only; stdout carries the single result line.
LOG_LEVEL_ENV_VAR = "SIGN_VERIFY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING


def resolve_log_level(name):
    """Map a level name in any case to its number; unknown names fall back to WARNING."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def get_log_level():
    return resolve_log_level(os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING"))
