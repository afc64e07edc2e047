"""
PDF processing utilities.

Helper functions:
    page_count: Quick page count of an in-memory PDF.
"""

import io
from typing import Optional

from PyPDF2 import PdfReader


def page_count(pdf_bytes: bytes) -> Optional[int]:
    """Get page count from PDF bytes, or None if unreadable."""
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        return len(reader.pages)
    except Exception:
        return None
