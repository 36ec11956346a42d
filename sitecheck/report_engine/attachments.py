"""Decode raw attachments into embeddable or omitted report attachments."""

import base64
import json
import logging
import re

from sitecheck.report_engine.models.lifecycle import RawAttachment
from sitecheck.report_engine.models.run_record import Attachment
from sitecheck.report_engine.rendering.formatting import format_bytes

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n… (truncated)"
JSON_CONTENT_TYPE = "application/json"

_ARCHIVE_RE = re.compile(r"zip|tar")


def read_attachment_body(attachment: RawAttachment) -> bytes | None:
    """Return the attachment payload, reading it from disk when needed.

    Raises:
        OSError: If the payload file cannot be read

    """
    if attachment.body is not None:
        if isinstance(attachment.body, str):
            return attachment.body.encode("utf-8")
        return attachment.body
    if attachment.path is not None:
        return attachment.path.read_bytes()
    return None


def decode_json_body(body: bytes) -> object | None:
    """Parse a JSON payload, returning None when it is not valid JSON."""
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None


def _truncate(text: str, max_text_length: int) -> tuple[str, bool]:
    if len(text) <= max_text_length:
        return text, False
    return f"{text[:max_text_length]}{TRUNCATION_MARKER}", True


def process_attachment(
    attachment: RawAttachment,
    body: bytes | None,
    inline_limit_bytes: int,
    max_text_length: int,
    read_error: str | None = None,
) -> Attachment:
    """Classify an attachment payload by media type.

    Args:
        attachment: Raw attachment as reported by the framework
        body: Payload bytes, or None when unavailable
        inline_limit_bytes: Payloads above this size are omitted
        max_text_length: Character ceiling for text payloads
        read_error: Message describing why the payload could not be read

    Returns:
        Embedded, truncated, or omitted attachment

    """
    name = attachment.name
    content_type = attachment.content_type

    if body is None:
        return Attachment(
            name=name,
            content_type=content_type,
            omitted=True,
            reason=read_error or "Attachment data unavailable.",
            error=read_error,
        )

    size = len(body)
    if size > inline_limit_bytes:
        return Attachment(
            name=name,
            content_type=content_type,
            size=size,
            omitted=True,
            reason=(
                f"Attachment omitted; {format_bytes(size)} exceeds inline limit "
                f"of {format_bytes(inline_limit_bytes)}."
            ),
        )

    if content_type.startswith("image/"):
        encoded = base64.b64encode(body).decode("ascii")
        return Attachment(
            name=name,
            content_type=content_type,
            size=size,
            data_uri=f"data:{content_type};base64,{encoded}",
        )

    if content_type.startswith("text/") or content_type == JSON_CONTENT_TYPE:
        text, truncated = _truncate(
            body.decode("utf-8", errors="replace"), max_text_length
        )
        return Attachment(
            name=name,
            content_type=content_type,
            size=size,
            text=text,
            truncated=truncated,
        )

    if _ARCHIVE_RE.search(content_type) or content_type == "video/webm":
        return Attachment(
            name=name,
            content_type=content_type,
            size=size,
            omitted=True,
            reason=(
                f"Attachment ({format_bytes(size)}) not embedded "
                f"(type {content_type})."
            ),
        )

    encoded = base64.b64encode(body).decode("ascii")
    return Attachment(
        name=name,
        content_type=content_type,
        size=size,
        data_uri=f"data:{content_type};base64,{encoded}",
    )


def load_attachment(
    attachment: RawAttachment,
) -> tuple[bytes | None, str | None]:
    """Read an attachment payload, converting read failures into a reason."""
    try:
        return read_attachment_body(attachment), None
    except OSError as e:
        message = f"Unable to read attachment {attachment.name}: read error ({e})"
        logger.warning(message)
        return None, message
