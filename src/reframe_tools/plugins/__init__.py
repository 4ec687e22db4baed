"""Reframe plugins: geometry resolution, transcoding, and crop selection."""
