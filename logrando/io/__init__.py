"""Binary format helpers for game asset files."""

from .sound import (  # noqa: F401
    HEADER_SIZE,
    MAX_PAYLOAD,
    SOUND_MAGIC,
    audio_to_sound,
    build_header,
    decode,
    encode,
    sound_to_audio,
)

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
