"""
Upload and link validators for the editor forms.

Every file is checked for type and size before it is attached to a
submission; a rejected file never reaches the backend.
"""

import os
import re

from django.core.exceptions import ValidationError
from django.utils.deconstruct import deconstructible

from tenant_backoffice.conf import MEGABYTE, backoffice_settings


# Extensions accepted when the browser sends a generic content type
EXTENSION_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".mp4": "video/mp4",
    ".pdf": "application/pdf",
}

YOUTUBE_EMBED_MARKER = "youtube.com/embed"

# Share, watch and embed links; the second group is the video id
YOUTUBE_LINK_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


@deconstructible
class UploadValidator:
    """
    Reject uploads over a size limit or outside a set of content types.

    ``kind`` names the setting pair to use: "IMAGE", "VIDEO" or
    "DOCUMENT" map to MAX_<KIND>_SIZE and <KIND>_CONTENT_TYPES.
    Settings are read at validation time so tests can override them.
    """

    messages = {
        "IMAGE": ("Please upload a JPEG, JPG, or PNG image.", "Image size exceeds {limit}MB limit."),
        "VIDEO": ("Please upload an MP4 file only.", "File size exceeds {limit}MB limit."),
        "DOCUMENT": ("Please upload a PDF file only.", "File size exceeds {limit}MB limit."),
    }

    def __init__(self, kind: str):
        if kind not in self.messages:
            raise ValueError(f"Unknown upload kind: '{kind}'")
        self.kind = kind

    @property
    def max_size(self) -> int:
        return getattr(backoffice_settings, f"MAX_{self.kind}_SIZE")

    @property
    def content_types(self) -> list:
        return getattr(backoffice_settings, f"{self.kind}_CONTENT_TYPES")

    def __call__(self, upload):
        if upload is None:
            return
        type_message, size_message = self.messages[self.kind]

        content_type = detect_content_type(upload)
        if content_type not in self.content_types:
            raise ValidationError(type_message, code="invalid_type")

        if upload.size > self.max_size:
            raise ValidationError(
                size_message.format(limit=self.max_size // MEGABYTE),
                code="file_too_large",
            )

    def __eq__(self, other):
        return isinstance(other, UploadValidator) and other.kind == self.kind


def detect_content_type(upload) -> str:
    """
    Content type of an upload.

    Uses the declared type unless it is missing or generic, in which
    case the file extension decides.
    """
    content_type = (getattr(upload, "content_type", "") or "").lower()
    if content_type and content_type != "application/octet-stream":
        return content_type
    extension = os.path.splitext(getattr(upload, "name", "") or "")[1].lower()
    return EXTENSION_CONTENT_TYPES.get(extension, content_type)


validate_image = UploadValidator("IMAGE")
validate_video = UploadValidator("VIDEO")
validate_document = UploadValidator("DOCUMENT")


def validate_youtube_embed(value: str):
    """Only embeddable YouTube links can be rendered by the templates."""
    if value and YOUTUBE_EMBED_MARKER not in value:
        raise ValidationError(
            "Please provide a valid YouTube embed URL "
            "(e.g., https://www.youtube.com/embed/VIDEO_ID).",
            code="invalid_youtube_link",
        )


def youtube_embed_url(value: str):
    """
    Embed URL for any YouTube share, watch or embed link.

    Returns None when ``value`` carries no 11-character video id.
    """
    match = YOUTUBE_LINK_RE.match(value or "")
    if match is None or len(match.group(2)) != 11:
        return None
    return f"https://www.youtube.com/embed/{match.group(2)}"
