"""Relay style opaque cursors for offset based connections."""

from strawberry.relay.utils import from_base64, to_base64

from ..errors import ValidationError

CURSOR_PREFIX = 'arrayconnection'


def encode_cursor(offset: int) -> str:
    return to_base64(CURSOR_PREFIX, offset)


def decode_cursor(cursor: str) -> int:
    """Offset encoded in ``cursor``.

    Raises:
        ValidationError: not a cursor produced by :func:`encode_cursor`.
    """
    try:
        prefix, raw = from_base64(cursor)
        offset = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid cursor {cursor!r}", 'after', cursor) from None
    if prefix != CURSOR_PREFIX or offset < 0:
        raise ValidationError(f"Invalid cursor {cursor!r}", 'after', cursor)
    return offset
