"""sign-verify CLI application with Typer."""

import logging
from dataclasses import dataclass
from typing import NoReturn, Optional

import typer

from config import VERSION, get_log_level
from key_encoding import public_key_address, uncompressed_public_key_hex
from signature_verifier import (
    VerificationError,
    decode_hex,
    strip_hex_prefix,
    verify_signature,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sign-verify",
    help="Verify secp256k1 ECDSA signatures over the SHA-256 digest of a message",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass(frozen=True)
class OptionSpec:
    flag: str
    description: str
    required: bool = True


PK_OPTION = OptionSpec("--pk", "uncompressed public key (hex)")
SIGN_R_OPTION = OptionSpec("--signR", "Signature R value (hex)")
SIGN_S_OPTION = OptionSpec("--signS", "Signature S value (hex)")
MSG_OPTION = OptionSpec("--msg", "Message whose sha256 was signed (text)")
X_OPTION = OptionSpec("--x", "Public key X coordinate (hex)")
Y_OPTION = OptionSpec("--y", "Public key Y coordinate (hex)")


def _option(spec: OptionSpec):
    return typer.Option(... if spec.required else None, spec.flag, help=spec.description)


def _fail(exc: Exception) -> NoReturn:
    """Print a validation error and exit non-zero."""
    typer.secho(str(exc), err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1) from exc


def _parse_coordinate(value: str, field: str) -> int:
    value = strip_hex_prefix(value)
    if len(value) % 2:
        value = "0" + value
    return int.from_bytes(decode_hex(value, field), "big")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"sign-verify version {VERSION}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    logging.basicConfig(level=get_log_level())


@app.command()
def verify(
    pk: str = _option(PK_OPTION),
    sign_r: str = _option(SIGN_R_OPTION),
    sign_s: str = _option(SIGN_S_OPTION),
    msg: str = _option(MSG_OPTION),
) -> None:
    """verify signature"""
    try:
        is_verified = verify_signature(pk, sign_r, sign_s, msg)
    except VerificationError as e:
        logger.debug("Verification rejected input: %s", e.kind)
        _fail(e)

    if is_verified:
        typer.echo("Signature Valid!")
    else:
        typer.echo("Signature NOT Valid!")


@app.command()
def pubkey(
    x: str = _option(X_OPTION),
    y: str = _option(Y_OPTION),
) -> None:
    """Encode X/Y coordinates as an uncompressed public key (hex)."""
    try:
        public_key_hex = uncompressed_public_key_hex(
            _parse_coordinate(x, "x"), _parse_coordinate(y, "y")
        )
    except ValueError as e:
        _fail(e)
    typer.echo(public_key_hex)


@app.command()
def address(pk: str = _option(PK_OPTION)) -> None:
    """Print the SHA3-256 address of an uncompressed public key."""
    try:
        typer.echo(public_key_address(pk))
    except VerificationError as e:
        _fail(e)


if __name__ == "__main__":
    app()
