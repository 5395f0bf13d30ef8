import pytest

from core.models.errors import ValidationError
from core.utils.multipart import parse_form_data


class TestParseFormData:
    def test_file_and_fields(self, multipart_body) -> None:
        body, content_type = multipart_body(
            files={"image": ("cat.png", b"\x89PNG\r\n\x1a\nrest", "image/png")},
            fields={"width": "640", "height": "480"},
        )

        parts = parse_form_data(body, content_type)

        assert set(parts) == {"image", "width", "height"}
        image = parts["image"]
        assert image.data == b"\x89PNG\r\n\x1a\nrest"
        assert image.content_type == "image/png"
        assert image.filename == "cat.png"
        assert parts["width"].data == b"640"
        assert parts["width"].filename is None
        assert parts["width"].content_type is None

    def test_file_without_content_type(self, multipart_body) -> None:
        body, content_type = multipart_body(files={"image": ("blob", b"abc", None)})

        assert parse_form_data(body, content_type)["image"].content_type is None

    def test_empty_form(self, multipart_body) -> None:
        body, content_type = multipart_body()

        assert parse_form_data(body, content_type) == {}

    @pytest.mark.parametrize(
        "content_type",
        [None, "", "application/json", "multipart/form-data"],
    )
    def test_rejects_non_multipart(self, multipart_body, content_type) -> None:
        body, _ = multipart_body(fields={"a": "b"})

        with pytest.raises(ValidationError) as exc:
            parse_form_data(body, content_type)

        assert exc.value.error_code == "INVALID_MULTIPART"

    def test_rejects_malformed_body(self) -> None:
        with pytest.raises(ValidationError) as exc:
            parse_form_data(b"garbage that is not multipart", "multipart/form-data; boundary=xyz")

        assert exc.value.error_code == "INVALID_MULTIPART"
