"""Normalization of captured process output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from toolchain.platform import current_platform

if TYPE_CHECKING:
    from toolchain.platform import PlatformProfile


def normalize_output(raw: bytes, platform: PlatformProfile | None = None) -> str:
    """Decode combined stdout/stderr bytes to text.

    On a platform with a legacy console encoding the bytes are decoded
    with it first; anywhere else, or when that decode fails, they are
    read as UTF-8 with undecodable bytes replaced.

    Examples:
        >>> from toolchain.platform import POSIX
        >>> normalize_output(b"hello\\n", POSIX)
        'hello\\n'
    """
    platform = platform or current_platform()
    if platform.legacy_encoding:
        try:
            return raw.decode(platform.legacy_encoding)
        except UnicodeDecodeError:
            pass
    return raw.decode("utf-8", errors="replace")


__all__ = ["normalize_output"]
