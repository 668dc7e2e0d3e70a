"""
Story input to Veo prompt JSON.

- normalizer: timeline filtering and ordered request parts
- requester: the single Gemini call and response validation
"""

from .errors import (
    ConfigurationError,
    InputError,
    PromptGenerationError,
    SchemaViolationError,
    TransportError,
    UnknownError,
)
from .models import FormState, ImagePart, ReferenceImage, TextPart, TimedEntry
from .normalizer import build_parts, has_valid_actions, has_valid_dialogue, render_timeline
from .requester import GeminiClient, generate_veo_prompt

__all__ = [
    "ConfigurationError",
    "FormState",
    "GeminiClient",
    "ImagePart",
    "InputError",
    "PromptGenerationError",
    "ReferenceImage",
    "SchemaViolationError",
    "TextPart",
    "TimedEntry",
    "TransportError",
    "UnknownError",
    "build_parts",
    "generate_veo_prompt",
    "has_valid_actions",
    "has_valid_dialogue",
    "render_timeline",
]
