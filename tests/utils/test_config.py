"""Unit tests for ReframeConfig and its environment overrides."""

import pytest
from PIL import Image
from pydantic import ValidationError

from reframe_tools.common.config import ReframeConfig
from reframe_tools.common.schemas import ScalePolicy, Size


def test_defaults():
    """Test the default configuration."""
    config = ReframeConfig()

    assert config.default_target_size == Size(width=1920, height=1080)
    assert config.scale_policy is ScalePolicy.COVER
    assert config.quality_ladder == (95, 85, 75, 65, 55, 45, 35)
    assert config.min_quality == 30
    assert config.fallback_quality == 95
    assert config.small_file_quality == 98
    assert config.resample_filter == Image.Resampling.LANCZOS


def test_from_env_overrides(monkeypatch: pytest.MonkeyPatch):
    """Test REFRAME_* variables override defaults."""
    monkeypatch.setenv("REFRAME_MAX_WORKERS", "2")
    monkeypatch.setenv("REFRAME_SCALE_POLICY", "FIT")
    monkeypatch.setenv("REFRAME_RESAMPLE", "bilinear")
    monkeypatch.setenv("REFRAME_PNG_OPTIMIZE", "no")

    config = ReframeConfig.from_env()

    assert config.max_workers == 2
    assert config.scale_policy is ScalePolicy.FIT
    assert config.resample_filter == Image.Resampling.BILINEAR
    assert config.png_optimize is False


def test_from_env_without_variables(monkeypatch: pytest.MonkeyPatch):
    """Test from_env returns defaults when nothing is set."""
    for name in ("MAX_WORKERS", "SCALE_POLICY", "RESAMPLE", "PNG_OPTIMIZE"):
        monkeypatch.delenv(f"REFRAME_{name}", raising=False)

    assert ReframeConfig.from_env() == ReframeConfig()


def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch):
    """Test invalid settings fail validation."""
    with pytest.raises(ValidationError):
        _ = ReframeConfig(max_workers=0)

    monkeypatch.setenv("REFRAME_RESAMPLE", "nearest")
    with pytest.raises(ValidationError):
        _ = ReframeConfig.from_env()
