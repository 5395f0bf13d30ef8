from collections.abc import Mapping

from core.utils.constants import DEFAULT_EXTENSION, MIME_TYPE_EXTENSION_MAP


def normalize_mime_type(content_type: str | None) -> str:
    """Strip parameters and case from a MIME string ("Image/PNG; q=1" -> "image/png")."""
    if not content_type:
        return ""

    return content_type.split(";", 1)[0].strip().lower()


def extension_for(content_type: str | None) -> str:
    """Return the file extension for a MIME type, falling back to png."""
    mime_map: Mapping[str, str] = MIME_TYPE_EXTENSION_MAP
    return mime_map.get(normalize_mime_type(content_type), DEFAULT_EXTENSION)
