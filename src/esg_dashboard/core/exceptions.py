# src/esg_dashboard/core/exceptions.py
from __future__ import annotations


class UploadError(ValueError):
    """Uploaded file could not be turned into an ESG dataset."""
