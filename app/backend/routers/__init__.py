"""
Routers package for FastAPI endpoints.

Organized by domain:
- process_pdf: PDF upload and heading/summary extraction
"""

from . import process_pdf

__all__ = ["process_pdf"]
