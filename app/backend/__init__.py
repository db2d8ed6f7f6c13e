"""
PDF Extraction Backend Application.

A FastAPI service that extracts the headings and a summary from
uploaded PDF documents using AI (OpenAI structured outputs).
"""

__version__ = "1.0.0"
