"""Output format negotiation from the client's Accept header."""

from core.utils.constants import PREFERRED_OUTPUT_FORMATS


def pick_format(accept_header: str | None, stored_content_type: str) -> str:
    """Pick the response MIME type for a transformed image.

    Preferred formats are tried in order and the first one that appears
    anywhere in the Accept header wins. Matching is plain substring
    containment, not media-range parsing: q-values are ignored and
    ``image/avifoo`` counts as ``image/avif``.

    Args:
        accept_header: Raw Accept header value, if any
        stored_content_type: Content type recorded for the stored object

    Returns:
        A preferred format the client accepts, else ``stored_content_type``
    """
    if accept_header:
        for content_type in PREFERRED_OUTPUT_FORMATS:
            if content_type in accept_header:
                return content_type

    return stored_content_type
