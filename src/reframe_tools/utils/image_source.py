"""Input acquisition: turn raw file bytes into a RasterImage.

The engine itself never touches files; callers read bytes however they
like and hand them to :func:`load_source`.
"""

from io import BytesIO
from pathlib import Path
from typing import BinaryIO, ClassVar

from loguru import logger
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field

from ..common.errors import DecodeError
from ..common.raster import RasterImage
from ..common.schemas import round_half_up
from .media_types import MediaType, is_supported_image, sniff_mime


class SourceInfo(BaseModel):
    """What the caller learns about a source before converting it."""

    width: int
    height: int
    byte_length: int
    mime_type: str
    name: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def size_kb(self) -> int:
        return round_half_up(self.byte_length / 1024)

    @property
    def aspect(self) -> float:
        return self.width / self.height


class SourceImage(BaseModel):
    raster: RasterImage
    info: SourceInfo = Field(description="Dimensions, size and type of the encoded source")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


def _read_bytes(source: bytes | bytearray | BinaryIO) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    _ = source.seek(0)
    return source.read()


def load_source(source: bytes | bytearray | BinaryIO, name: str | None = None) -> SourceImage:
    """
    Decode a PNG/JPEG/WEBP byte source.

    Args:
        source: Encoded bytes or a binary file-like object
        name: Original filename, kept for display and download naming

    Returns:
        SourceImage with the RGBA raster and its SourceInfo

    Raises:
        DecodeError: If the bytes are empty, not an image, or not PNG/JPEG/WEBP
    """
    data = _read_bytes(source)
    if not data:
        raise DecodeError("Source is empty")

    mime_type = sniff_mime(data)
    if MediaType.from_mime(mime_type) is not MediaType.IMAGE:
        raise DecodeError(f"Source is not an image: {mime_type}")
    if not is_supported_image(mime_type):
        raise DecodeError(f"Unsupported image type: {mime_type}")

    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc

    raster = RasterImage(image=rgba, byte_length=len(data))
    info = SourceInfo(
        width=raster.width,
        height=raster.height,
        byte_length=len(data),
        mime_type=mime_type,
        name=name,
    )
    logger.debug(f"Loaded {info.mime_type} {info.width}x{info.height} ({info.size_kb} KB)")
    return SourceImage(raster=raster, info=info)


def load_source_file(path: str | Path) -> SourceImage:
    """Convenience wrapper for callers that start from a path."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return load_source(path.read_bytes(), name=path.name)
