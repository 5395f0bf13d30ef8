import pytest

from core.utils.mime import extension_for, normalize_mime_type


@pytest.mark.parametrize(
    "content_type,expected",
    [
        ("image/jpeg", "jpg"),
        ("image/png", "png"),
        ("image/svg+xml", "svg"),
        ("IMAGE/JPEG", "jpg"),
        ("image/webp; charset=binary", "webp"),
        ("application/pdf", "pdf"),
        ("text/plain; charset=utf-8", "txt"),
        ("video/mp4", "mp4"),
    ],
)
def test_known_types(content_type: str, expected: str) -> None:
    assert extension_for(content_type) == expected


@pytest.mark.parametrize(
    "content_type",
    [None, "", "application/x-not-registered", "image/x-unknown"],
)
def test_unknown_types_fall_back_to_png(content_type) -> None:
    assert extension_for(content_type) == "png"


def test_normalize_mime_type() -> None:
    assert normalize_mime_type(" Image/PNG ; q=1") == "image/png"
    assert normalize_mime_type(None) == ""
