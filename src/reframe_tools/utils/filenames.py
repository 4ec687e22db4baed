import re

from ..common.schemas import OutputFormat

_IMAGE_SUFFIX = re.compile(r"\.(png|jpg|jpeg|webp)$", re.IGNORECASE)


def strip_image_extension(name: str) -> str:
    return _IMAGE_SUFFIX.sub("", name)


def output_filename(
    original_name: str | None,
    format: OutputFormat | str,
    custom_name: str | None = None,
    default_stem: str = "converted-image",
) -> str:
    """Download name for a result: custom or original stem plus the format's extension.

    A blank custom name falls back to the original name. Known image
    extensions are replaced, never doubled (``photo.png`` -> ``photo.jpg``).
    """
    extension = OutputFormat.parse(format).extension

    if custom_name and custom_name.strip():
        stem = strip_image_extension(custom_name.strip())
    elif original_name:
        stem = strip_image_extension(original_name)
    else:
        stem = default_stem

    return f"{stem or default_stem}{extension}"
