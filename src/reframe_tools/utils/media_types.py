from enum import StrEnum

import magic

SUPPORTED_IMAGE_MIME_TYPES: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


class MediaType(StrEnum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"
    FILE = "file"

    @classmethod
    def from_mime(cls, file_type: str) -> "MediaType":
        if file_type.startswith("image"):
            return MediaType.IMAGE
        elif file_type.startswith("video"):
            return MediaType.VIDEO
        elif file_type.startswith("audio"):
            return MediaType.AUDIO
        elif file_type.startswith("text"):
            return MediaType.TEXT
        else:
            return MediaType.FILE


def sniff_mime(data: bytes) -> str:
    """MIME type from content (libmagic), never from the filename."""
    mime = magic.Magic(mime=True)
    file_type = mime.from_buffer(data)
    if not file_type:
        file_type = "application/octet-stream"
    # Older libmagic builds report "image/jpg"
    if file_type == "image/jpg":
        file_type = "image/jpeg"
    return file_type


def is_supported_image(mime_type: str) -> bool:
    return mime_type in SUPPORTED_IMAGE_MIME_TYPES


def get_extension_from_mime(mime_type: str) -> str | None:
    return SUPPORTED_IMAGE_MIME_TYPES.get(mime_type)
