"""Crop window state machine."""
