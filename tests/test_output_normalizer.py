from __future__ import annotations

from execute.output import normalize_output
from toolchain.platform import POSIX, WINDOWS


def test_posix_output_is_utf8() -> None:
    assert normalize_output("héllo, 世界\n".encode(), POSIX) == "héllo, 世界\n"


def test_posix_invalid_bytes_are_replaced() -> None:
    assert normalize_output(b"ok \xff\n", POSIX) == "ok �\n"


def test_windows_output_is_decoded_from_gbk() -> None:
    raw = "系统找不到指定的文件。\r\n".encode("gbk")

    assert normalize_output(raw, WINDOWS) == "系统找不到指定的文件。\r\n"


def test_windows_falls_back_when_not_gbk() -> None:
    assert normalize_output(b"\xff\xfe", WINDOWS) == "��"


def test_empty_output() -> None:
    assert normalize_output(b"", POSIX) == ""
    assert normalize_output(b"", WINDOWS) == ""
