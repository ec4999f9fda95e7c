import base64

import pytest

from toolbox_core.chat.attachments import (
    build_attachment,
    check_attachment_size,
    flatten_attachments,
    load_attachments,
    read_attachment,
)
from toolbox_core.domain.exceptions import AttachmentTooLarge
from toolbox_core.domain.models import MAX_ATTACHMENT_BYTES, Attachment


def test_size_limit_boundary():
    check_attachment_size("exact.bin", 10 * 1024 * 1024)
    with pytest.raises(AttachmentTooLarge) as exc:
        check_attachment_size("big.bin", 10 * 1024 * 1024 + 1)
    assert exc.value.message == "File big.bin is too large. Maximum size is 10MB."


def test_build_attachment_at_limit_and_over():
    att = build_attachment("exact.bin", b"\0" * MAX_ATTACHMENT_BYTES, "application/octet-stream")
    assert att.size_bytes == MAX_ATTACHMENT_BYTES
    with pytest.raises(AttachmentTooLarge):
        build_attachment("over.bin", b"\0" * (MAX_ATTACHMENT_BYTES + 1), "application/octet-stream")


def test_text_decoded_binary_base64():
    text = build_attachment("notes.txt", "héllo".encode("utf-8"))
    assert text.mime_type == "text/plain"
    assert text.encoding == "text"
    assert text.payload == "héllo"

    raw = b"\x89PNG\r\n"
    image = build_attachment("photo.png", raw)
    assert image.mime_type == "image/png"
    assert image.encoding == "base64"
    assert base64.b64decode(image.payload) == raw


def test_read_and_load_attachments(tmp_path):
    (tmp_path / "a.txt").write_text("alpha", encoding="utf-8")
    (tmp_path / "b.csv").write_text("x,y\n1,2\n", encoding="utf-8")
    att = read_attachment(tmp_path / "a.txt")
    assert att.name == "a.txt"
    assert att.size_bytes == 5

    attachments, warnings = load_attachments([tmp_path / "a.txt", tmp_path / "b.csv"])
    assert warnings == []
    assert sorted(a.name for a in attachments) == ["a.txt", "b.csv"]


def test_load_attachments_warns_on_oversize(tmp_path):
    small = tmp_path / "small.txt"
    small.write_text("ok", encoding="utf-8")
    big = tmp_path / "big.bin"
    with big.open("wb") as f:
        f.truncate(MAX_ATTACHMENT_BYTES + 1)

    attachments, warnings = load_attachments([small, big])
    assert [a.name for a in attachments] == ["small.txt"]
    assert warnings == ["File big.bin is too large. Maximum size is 10MB."]


def test_flatten_skips_unusable_attachments():
    missing = Attachment(name="gone.txt", size_bytes=10, mime_type="text/plain", payload=None)
    oversized = Attachment(name="huge.txt", size_bytes=MAX_ATTACHMENT_BYTES + 1, mime_type="text/plain", payload="x")
    assert flatten_attachments("hello", [missing, oversized]) == "hello"


def test_flatten_short_text_preview():
    att = Attachment(name="a.md", size_bytes=512, mime_type="text/markdown", payload="# Title")
    assert flatten_attachments("see file", [att]) == (
        "see file\n\nAttached files:\n\n- a.md (0.50 KB)\nContent preview: # Title..."
    )


def test_load_attachments_skips_unreadable_file(tmp_path):
    ok = tmp_path / "ok.txt"
    ok.write_text("fine", encoding="utf-8")
    folder = tmp_path / "folder"
    folder.mkdir()

    attachments, warnings = load_attachments([ok, folder])
    assert [a.name for a in attachments] == ["ok.txt"]
    assert warnings == ["File folder could not be read."]


def test_load_attachments_missing_file(tmp_path):
    attachments, warnings = load_attachments([tmp_path / "gone.txt"])
    assert attachments == []
    assert warnings == ["File gone.txt could not be read."]


def test_flatten_keeps_empty_text_file():
    empty = build_attachment("empty.txt", b"")
    assert empty.payload == ""
    assert flatten_attachments("see", [empty]) == (
        "see\n\nAttached files:\n\n- empty.txt (0.00 KB)\nContent preview: ..."
    )
