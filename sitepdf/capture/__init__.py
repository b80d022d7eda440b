"""Capture package — browser-driven page capture & scheduling."""

from sitepdf.capture.models import CaptureOptions, CaptureResult, WorkItem
from sitepdf.capture.page import capture_page
from sitepdf.capture.scheduler import run_captures

__all__ = ["capture_page", "run_captures", "WorkItem", "CaptureResult", "CaptureOptions"]
