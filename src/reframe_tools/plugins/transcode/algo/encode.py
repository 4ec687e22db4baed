"""Pure image encoding logic (single surface -> bytes)."""

from io import BytesIO

from PIL import Image, features

from ....common.errors import EncodeError
from ....common.schemas import OutputFormat


def get_pil_format(format_str: str | OutputFormat) -> str:
    """Convert a format string (``jpg``, ``image/png``, ``WEBP``...) to a Pillow format name."""
    try:
        return OutputFormat.parse(format_str).value
    except ValueError as exc:
        raise EncodeError(str(exc)) from exc


def encoder_available(fmt: OutputFormat) -> bool:
    if fmt is OutputFormat.WEBP:
        return bool(features.check("webp"))
    return True


def encode_image(
    image: Image.Image,
    fmt: OutputFormat,
    quality: int | None = None,
    *,
    lossless: bool = False,
    optimize: bool = True,
) -> bytes:
    """
    Encode a composed surface in memory.

    Args:
        image: Surface to encode; must already be RGB for JPEG
        fmt: Target format
        quality: Lossy quality 1-100 (ignored for PNG and lossless WEBP)
        lossless: Encode WEBP losslessly
        optimize: Let the PNG encoder search for a smaller deflate stream

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If the encoder is unavailable or rejects the surface
    """
    if not encoder_available(fmt):
        raise EncodeError(f"No {fmt.value} encoder available in this Pillow build")

    save_kwargs: dict[str, object] = {}

    if fmt is OutputFormat.JPEG:
        # JPEG has no alpha channel; callers flatten first
        if image.mode != "RGB":
            raise EncodeError(f"JPEG surfaces must be RGB, got {image.mode}")
        save_kwargs["quality"] = quality if quality is not None else 95

    elif fmt is OutputFormat.WEBP:
        if lossless:
            save_kwargs["lossless"] = True
            save_kwargs["quality"] = 100
        else:
            save_kwargs["quality"] = quality if quality is not None else 95

    elif fmt is OutputFormat.PNG:
        save_kwargs["optimize"] = optimize

    buffer = BytesIO()
    try:
        image.save(buffer, format=fmt.value, **save_kwargs)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Failed to encode {fmt.value}: {exc}") from exc

    return buffer.getvalue()
