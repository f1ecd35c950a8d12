"""
Gemini provider package.

Exports:
- GeminiProvider: Adapter implementing LLMProvider over the google-genai SDK
"""

from .client import GeminiProvider, extract_candidate_text, to_gemini_history

__all__ = ["GeminiProvider", "extract_candidate_text", "to_gemini_history"]
