"""multipart/form-data decoding for API Gateway request bodies."""

from dataclasses import dataclass, field

from python_multipart.exceptions import FormParserError
from python_multipart.multipart import MultipartParser, parse_options_header

from core.models.errors import ValidationError
from core.utils.constants import ERROR_CODE_INVALID_MULTIPART


@dataclass
class FormPart:
    """One decoded part of a multipart body."""

    name: str
    content_type: str | None = None
    filename: str | None = None
    data: bytes = b""


@dataclass
class _PartBuilder:
    headers: dict[str, str] = field(default_factory=dict)
    header_field: bytearray = field(default_factory=bytearray)
    header_value: bytearray = field(default_factory=bytearray)
    data: bytearray = field(default_factory=bytearray)

    def finish_header(self) -> None:
        name = self.header_field.decode("latin-1").strip().lower()
        self.headers[name] = self.header_value.decode("latin-1").strip()
        self.header_field.clear()
        self.header_value.clear()

    def build(self) -> FormPart | None:
        disposition, params = parse_options_header(self.headers.get("content-disposition", ""))
        if disposition != b"form-data" or b"name" not in params:
            return None

        filename = params.get(b"filename")
        return FormPart(
            name=params[b"name"].decode("utf-8"),
            content_type=self.headers.get("content-type") or None,
            filename=filename.decode("utf-8") if filename is not None else None,
            data=bytes(self.data),
        )


def _invalid(message: str) -> ValidationError:
    return ValidationError(message=message, error_code=ERROR_CODE_INVALID_MULTIPART)


def parse_form_data(body: bytes, content_type: str | None) -> dict[str, FormPart]:
    """Decode a multipart/form-data body into its parts, keyed by field name.

    When a field name repeats, the last part wins.

    Raises:
        ValidationError: If the content type is not multipart/form-data,
            has no boundary, or the body cannot be parsed
    """
    mime, params = parse_options_header(content_type or "")
    if mime != b"multipart/form-data":
        raise _invalid("Request body must be multipart/form-data")

    boundary = params.get(b"boundary")
    if not boundary:
        raise _invalid("Multipart boundary is missing")

    parts: dict[str, FormPart] = {}
    current = _PartBuilder()

    def on_part_begin() -> None:
        nonlocal current
        current = _PartBuilder()

    def on_header_field(data: bytes, start: int, end: int) -> None:
        current.header_field.extend(data[start:end])

    def on_header_value(data: bytes, start: int, end: int) -> None:
        current.header_value.extend(data[start:end])

    def on_header_end() -> None:
        current.finish_header()

    def on_part_data(data: bytes, start: int, end: int) -> None:
        current.data.extend(data[start:end])

    def on_part_end() -> None:
        part = current.build()
        if part is not None:
            parts[part.name] = part

    parser = MultipartParser(
        boundary,
        callbacks={
            "on_part_begin": on_part_begin,
            "on_header_field": on_header_field,
            "on_header_value": on_header_value,
            "on_header_end": on_header_end,
            "on_part_data": on_part_data,
            "on_part_end": on_part_end,
        },
    )

    try:
        parser.write(body)
        parser.finalize()
    except FormParserError as exc:
        raise _invalid("Malformed multipart body") from exc

    return parts
