"""Aggressive-compression search over a fixed quality ladder.

Every rung is encoded (concurrently when ``max_workers > 1``) and the
candidate with the largest saving below the source size wins. This is a
sweep, not a bisection: the ladder is short and encoder sizes are not
guaranteed to be strictly monotonic.
"""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import ClassVar

from loguru import logger
from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from ....common.config import DEFAULT_CONFIG, ReframeConfig
from ....common.schemas import OutputFormat
from .encode import encode_image

EncodeFn = Callable[[Image.Image, OutputFormat, int], bytes]


class EncodedCandidate(BaseModel):
    quality: int = Field(ge=1, le=100)
    data: bytes = Field(repr=False)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def size_kb(self) -> float:
        return self.size / 1024


def min_quality_for(original_size_kb: float, config: ReframeConfig = DEFAULT_CONFIG) -> int:
    """Bottom rung of the ladder; larger sources are allowed to go lower."""
    if original_size_kb > config.huge_source_kb:
        return config.huge_min_quality
    if original_size_kb > config.large_source_kb:
        return config.large_min_quality
    return config.min_quality


def quality_ladder(original_size_kb: float, config: ReframeConfig = DEFAULT_CONFIG) -> list[int]:
    ladder = [*config.quality_ladder, min_quality_for(original_size_kb, config)]
    return list(dict.fromkeys(ladder))


def _encode_lossy(image: Image.Image, fmt: OutputFormat, quality: int) -> bytes:
    return encode_image(image, fmt, quality)


def sweep(
    image: Image.Image,
    fmt: OutputFormat,
    ladder: list[int],
    *,
    encode: EncodeFn,
    max_workers: int = 1,
    on_candidate: Callable[[EncodedCandidate], None] | None = None,
) -> list[EncodedCandidate]:
    """Encode ``image`` at every ladder quality; results keep ladder order."""
    if max_workers <= 1:
        candidates: list[EncodedCandidate] = []
        for quality in ladder:
            candidate = EncodedCandidate(quality=quality, data=encode(image, fmt, quality))
            candidates.append(candidate)
            if on_candidate:
                on_candidate(candidate)
        return candidates

    by_quality: dict[int, EncodedCandidate] = {}
    with ThreadPoolExecutor(max_workers=min(max_workers, len(ladder))) as executor:
        futures = {executor.submit(encode, image, fmt, quality): quality for quality in ladder}
        for future in as_completed(futures):
            quality = futures[future]
            candidate = EncodedCandidate(quality=quality, data=future.result())
            by_quality[quality] = candidate
            if on_candidate:
                on_candidate(candidate)

    return [by_quality[quality] for quality in ladder]


def select_best(
    candidates: list[EncodedCandidate],
    original_size_bytes: int,
) -> EncodedCandidate | None:
    """Candidate with the largest saving that is strictly smaller than the source.

    Ties go to the earlier (higher quality) rung.
    """
    original_kb = original_size_bytes / 1024
    best: EncodedCandidate | None = None
    best_ratio = 0.0

    for candidate in candidates:
        ratio = (original_kb - candidate.size_kb) / original_kb
        if candidate.size_kb < original_kb and ratio > best_ratio:
            best = candidate
            best_ratio = ratio

    return best


def aggressive_search(
    image: Image.Image,
    fmt: OutputFormat,
    original_size_bytes: int,
    *,
    config: ReframeConfig | None = None,
    encode: EncodeFn | None = None,
    on_candidate: Callable[[EncodedCandidate], None] | None = None,
) -> EncodedCandidate:
    """
    Pick the encode that shrinks the source the most.

    Args:
        image: Surface ready for the lossy encoder (RGB for JPEG)
        fmt: JPEG or WEBP
        original_size_bytes: Size of the encoded source file
        config: Ladder, thresholds and concurrency
        encode: Override for the per-candidate encoder
        on_candidate: Called once per finished ladder encode

    Returns:
        The chosen candidate. If nothing beats the source size this is the
        ``fallback_quality`` encode, or the ``small_file_quality`` encode for
        tiny sources when that one is no larger than the source.
    """
    config = config or DEFAULT_CONFIG
    encode = encode or _encode_lossy
    original_kb = original_size_bytes / 1024

    ladder = quality_ladder(original_kb, config)
    candidates = sweep(
        image,
        fmt,
        ladder,
        encode=encode,
        max_workers=config.max_workers,
        on_candidate=on_candidate,
    )
    for candidate in candidates:
        logger.debug(f"{fmt.value} q={candidate.quality}: {candidate.size_kb:.1f} KB")

    best = select_best(candidates, original_size_bytes)

    if best is None:
        logger.warning(
            f"No {fmt.value} candidate beat the {original_kb:.1f} KB source; "
            + f"falling back to q={config.fallback_quality}"
        )
        best = next(
            (c for c in candidates if c.quality == config.fallback_quality),
            None,
        ) or EncodedCandidate(
            quality=config.fallback_quality,
            data=encode(image, fmt, config.fallback_quality),
        )

    if original_kb < config.small_file_kb and best.size > original_size_bytes:
        high = EncodedCandidate(
            quality=config.small_file_quality,
            data=encode(image, fmt, config.small_file_quality),
        )
        if high.size <= original_size_bytes:
            best = high

    return best
