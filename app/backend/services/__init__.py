"""
Services package for PDF extraction application.

Contains:
- ai: OpenAI integration for heading and summary extraction
"""

from .ai import AIService, get_ai_service

__all__ = ["AIService", "get_ai_service"]
