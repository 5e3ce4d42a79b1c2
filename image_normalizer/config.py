import os
from dataclasses import dataclass, replace
from functools import lru_cache


ENV_PREFIX = "IMAGE_NORMALIZER_"


@dataclass(frozen=True)
class NormalizerSettings:
    """
    Tuning constants for the normalization pipeline.

    threshold: gray level at or above which a pixel counts as background
    max_value: value written for background pixels in the binary mask
    scan_workers: upper bound of threads used by the bounding box scan
    min_rows_per_partition: below this many rows per worker, use fewer workers
    max_input_bytes: decoded inputs larger than this are rejected
    """

    threshold: int = 200
    max_value: int = 255
    jpeg_quality: int = 95
    scan_workers: int = 4
    min_rows_per_partition: int = 64
    max_input_bytes: int = 20 * 1024 * 1024  # 20MB

    def __post_init__(self):
        if not 0 < self.threshold <= 255:
            raise ValueError("threshold must be in 1..255")
        if not 0 < self.max_value <= 255:
            raise ValueError("max_value must be in 1..255")
        if not 0 <= self.jpeg_quality <= 100:
            raise ValueError("jpeg_quality must be in 0..100")
        if self.scan_workers < 1:
            raise ValueError("scan_workers must be at least 1")
        if self.min_rows_per_partition < 1:
            raise ValueError("min_rows_per_partition must be at least 1")
        if self.max_input_bytes < 1:
            raise ValueError("max_input_bytes must be positive")

    def with_overrides(self, **overrides) -> "NormalizerSettings":
        return replace(self, **overrides)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")


def _build_settings() -> NormalizerSettings:
    defaults = NormalizerSettings()
    return NormalizerSettings(
        threshold=_env_int("THRESHOLD", defaults.threshold),
        max_value=_env_int("MAX_VALUE", defaults.max_value),
        jpeg_quality=_env_int("JPEG_QUALITY", defaults.jpeg_quality),
        scan_workers=_env_int("SCAN_WORKERS", defaults.scan_workers),
        min_rows_per_partition=_env_int("MIN_ROWS_PER_PARTITION", defaults.min_rows_per_partition),
        max_input_bytes=_env_int("MAX_INPUT_BYTES", defaults.max_input_bytes),
    )


@lru_cache
def get_settings() -> NormalizerSettings:
    """Settings from the environment, read once per process."""
    return _build_settings()
