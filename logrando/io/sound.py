"""Codec for the game's ``.sound`` container format.

A ``.sound`` file is a plain Ogg Vorbis stream with a 16-byte header in front
of it:

* 12 fixed bytes ``0B 00 00 00 00 00 07 00 00 00 00 00``
* the payload length as an unsigned 32-bit little-endian integer

Decoding strips the header and returns the payload verbatim.  By default the
header is **not** checked (the game writes it, nobody reads it back), which
means any input of at least 16 bytes decodes.  Passing ``strict=True`` turns
on validation of the fixed bytes and of the recorded length.

Two families of helpers are provided:

* :func:`encode` / :func:`decode` operate on in-memory ``bytes``;
* :func:`audio_to_sound` / :func:`sound_to_audio` stream between files so a
  large recording never has to be held in memory twice.
"""

from __future__ import annotations

import logging
import shutil
import struct
from pathlib import Path

from logrando.utils.errors import SoundHeaderError, SoundTooLargeError

log = logging.getLogger(__name__)

SOUND_MAGIC: bytes = bytes(
    [0x0B, 0x00, 0x00, 0x00, 0x00, 0x00, 0x07, 0x00, 0x00, 0x00, 0x00, 0x00]
)
_LENGTH = struct.Struct("<I")

#: Total header size in bytes (magic + length field).
HEADER_SIZE: int = len(SOUND_MAGIC) + _LENGTH.size

#: Largest payload the 32-bit length field can describe.
MAX_PAYLOAD: int = 0xFFFFFFFF


# ---------------------------------------------------------------------------
# header helpers
# ---------------------------------------------------------------------------
def build_header(size: int) -> bytes:
    """Return the 16-byte header for a payload of *size* bytes.

    Raises:
        SoundTooLargeError: If *size* does not fit into 32 bits.
    """
    if size < 0 or size > MAX_PAYLOAD:
        raise SoundTooLargeError(
            f"audio payload of {size} bytes exceeds the {MAX_PAYLOAD}-byte limit"
        )
    return SOUND_MAGIC + _LENGTH.pack(size)


def _check_header(header: bytes, payload_size: int | None) -> None:
    """Validate *header* against the fixed magic and, when known, the payload size."""
    if header[: len(SOUND_MAGIC)] != SOUND_MAGIC:
        raise SoundHeaderError(f"unexpected sound header bytes {header[:12].hex(' ')}")
    (recorded,) = _LENGTH.unpack_from(header, len(SOUND_MAGIC))
    if payload_size is not None and recorded != payload_size:
        raise SoundHeaderError(
            f"header records {recorded} payload bytes but {payload_size} follow"
        )


# ---------------------------------------------------------------------------
# in-memory codec
# ---------------------------------------------------------------------------
def encode(payload: bytes) -> bytes:
    """Wrap *payload* (raw audio bytes) in a sound container."""
    return build_header(len(payload)) + bytes(payload)


def decode(data: bytes, *, strict: bool = False) -> bytes:
    """Return the audio payload stored in the sound container *data*.

    Args:
        data: Complete container bytes.
        strict: Validate the fixed header bytes and the recorded length.

    Returns:
        Everything after the first :data:`HEADER_SIZE` bytes.

    Raises:
        SoundHeaderError: If *data* is shorter than a header, or when
            *strict* is set and the header does not match the payload.
    """
    if len(data) < HEADER_SIZE:
        raise SoundHeaderError(
            f"sound container is {len(data)} bytes, shorter than its {HEADER_SIZE}-byte header"
        )
    payload = bytes(data[HEADER_SIZE:])
    if strict:
        _check_header(bytes(data[:HEADER_SIZE]), len(payload))
    return payload


# ---------------------------------------------------------------------------
# streaming file helpers
# ---------------------------------------------------------------------------
def audio_to_sound(source_file: Path, dest_file: Path) -> Path:
    """Write *source_file* (plain audio) to *dest_file* as a sound container.

    The size check happens before *dest_file* is opened so an oversized input
    never truncates an existing destination.
    """
    source_file = Path(source_file)
    dest_file = Path(dest_file)
    header = build_header(source_file.stat().st_size)

    with source_file.open("rb") as src, dest_file.open("wb") as dst:
        dst.write(header)
        shutil.copyfileobj(src, dst)

    log.debug("Encoded %s → %s", source_file, dest_file)
    return dest_file


def sound_to_audio(source_file: Path, dest_file: Path, *, strict: bool = False) -> Path:
    """Strip the container header from *source_file* and write the audio to *dest_file*."""
    source_file = Path(source_file)
    dest_file = Path(dest_file)

    with source_file.open("rb") as src:
        header = src.read(HEADER_SIZE)
        if len(header) < HEADER_SIZE:
            raise SoundHeaderError(
                f"{source_file} is {len(header)} bytes, shorter than its {HEADER_SIZE}-byte header"
            )
        if strict:
            _check_header(header, source_file.stat().st_size - HEADER_SIZE)
        with dest_file.open("wb") as dst:
            shutil.copyfileobj(src, dst)

    log.debug("Decoded %s → %s", source_file, dest_file)
    return dest_file


__all__ = [
    "HEADER_SIZE",
    "MAX_PAYLOAD",
    "SOUND_MAGIC",
    "audio_to_sound",
    "build_header",
    "decode",
    "encode",
    "sound_to_audio",
]
