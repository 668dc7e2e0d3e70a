import json
import logging
from typing import Any, Dict, Optional, Sequence

from google import genai
from google.genai import types

from veoprompt.config.config import get_api_key, get_default_config, load_config

from .errors import (
    ConfigurationError,
    InputError,
    PromptGenerationError,
    SchemaViolationError,
    TransportError,
    UnknownError,
)
from .instructions import get_instruction
from .models import FormState, ImagePart, RequestPart, TextPart
from .normalizer import build_parts_from_form, has_input
from .schema import VEO_PROMPT_SCHEMA, validate_prompt

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Failed to generate prompt: "
MISSING_KEY_MESSAGE = "API key is missing. Please set the API_KEY environment variable."
MISSING_INPUT_MESSAGE = "Action timeline, dialogue timeline, or an image is required."
INVALID_JSON_MESSAGE = "The API did not return a valid JSON format."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while generating the prompt."


def _to_genai_part(part: RequestPart) -> types.Part:
    match part:
        case ImagePart(data=data, mime_type=mime_type):
            return types.Part.from_bytes(data=data, mime_type=mime_type)
        case TextPart(text=text):
            return types.Part.from_text(text=text)
    raise TypeError(f"Unsupported request part: {part!r}")


class GeminiClient:
    """Single-shot structured generation against a Gemini model. No retries."""

    def __init__(self, api_key: str, model_id: str = "gemini-2.5-flash"):
        self.model_id = model_id
        self._client = genai.Client(api_key=api_key)

    def generate(
        self,
        parts: Sequence[RequestPart],
        instruction: str,
        schema: Dict[str, Any],
    ) -> str:
        contents = types.Content(role="user", parts=[_to_genai_part(p) for p in parts])
        response = self._client.models.generate_content(
            model=self.model_id,
            contents=contents,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
                system_instruction=instruction,
            ),
        )
        return response.text or ""


def parse_response(text: str) -> str:
    """
    Validate the raw model output and return it re-serialized with two-space
    indentation. Text that does not open with a JSON delimiter is rejected
    before any parsing is attempted.
    """
    if not text.startswith("{") and not text.startswith("["):
        raise SchemaViolationError(INVALID_JSON_MESSAGE)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaViolationError(INVALID_JSON_MESSAGE) from exc
    validate_prompt(data)
    return json.dumps(data, indent=2, ensure_ascii=False)


def generate_veo_prompt(
    form: FormState,
    client: Optional[GeminiClient] = None,
    config: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Generate a pretty-printed Veo prompt JSON string for the submitted form.

    Configuration and input problems are raised before any request is made.
    Everything that goes wrong during the call or while decoding its result
    is raised as a PromptGenerationError carrying the user-facing message.
    The same form may produce different output on every call.

    Args:
        form (FormState): The submitted snapshot.
        client (GeminiClient, optional): Injected client; built from config otherwise.
        config (dict, optional): Configuration overrides, merged over the defaults;
            ``load_config()`` otherwise.

    Returns:
        str: The validated JSON object, indented by two spaces.
    """
    api_key = get_api_key()
    if not api_key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)

    if not has_input(form):
        raise InputError(MISSING_INPUT_MESSAGE)

    config = {**get_default_config(), **(config or load_config())}
    parts = build_parts_from_form(form)
    instruction = get_instruction(config["instruction_version"])
    if client is None:
        client = GeminiClient(api_key=api_key, model_id=config["model_id"])

    logger.info(f"Submitting {len(parts)} parts to {client.model_id}")
    try:
        text = client.generate(parts, instruction, VEO_PROMPT_SCHEMA)
        result = parse_response(text)
    except SchemaViolationError as exc:
        logger.error(f"Invalid response from Gemini API: {exc.message}")
        raise SchemaViolationError(ERROR_PREFIX + exc.message) from exc
    except PromptGenerationError:
        raise
    except Exception as exc:
        logger.exception("Error calling Gemini API")
        detail = str(exc)
        if not detail:
            raise UnknownError(UNKNOWN_ERROR_MESSAGE) from exc
        raise TransportError(ERROR_PREFIX + detail) from exc

    logger.info("Prompt generated successfully")
    return result
