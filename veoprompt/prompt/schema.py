from typing import Any, Dict, List

from .errors import SchemaViolationError


def _string(description: str) -> Dict[str, Any]:
    return {"type": "STRING", "description": description}


def _string_list(description: str) -> Dict[str, Any]:
    return {"type": "ARRAY", "items": {"type": "STRING"}, "description": description}


VEO_PROMPT_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "prompt": _string(
            "A concise, powerful, and highly descriptive main prompt for the video generation. "
            "Synthesize the most critical elements of the story into one compelling sentence."
        ),
        "keyword": _string_list(
            "An array of essential keywords from the story, including characters, objects, actions, and themes."
        ),
        "style": _string(
            "The visual style. Examples: 'cinematic', 'anime', 'hyperrealistic', 'watercolor', "
            "'3D animation', 'vintage film'."
        ),
        "tone": _string(
            "The emotional tone of the video. This should be based on the user's preference if provided, "
            "otherwise inferred from the context. Examples: 'dramatic', 'comedic', 'mysterious', 'epic', "
            "'serene', 'suspenseful'."
        ),
        "camera": _string(
            "The type of camera to simulate. Examples: 'DSLR', '8mm film', 'drone', 'security camera', 'handheld'."
        ),
        "motion": _string(
            "The primary camera movement. This should be based on the user's preference if provided, "
            "otherwise inferred from the context. Examples: 'slow pan left', 'dolly zoom', "
            "'fast tracking shot', 'static', 'whip pan'."
        ),
        "angle": _string(
            "The camera angle. Examples: 'low angle', 'high angle', 'eye-level', 'dutch angle', \"bird's eye view\"."
        ),
        "lens": _string(
            "The type of lens to simulate. Examples: 'wide-angle', 'telephoto', 'macro', 'fisheye'."
        ),
        "lighting": _string(
            "The lighting style. Examples: 'golden hour', 'neon noir', 'soft studio lighting', "
            "'moonlight', 'dramatic shadows'."
        ),
        "audio": _string(
            "Sound design, music, or dialogue. This should integrate the timed dialogue provided by the user. "
            "Examples: 'epic orchestral score and character speaks: \"Follow me!\"', 'ambient nature sounds'."
        ),
        "setting": _string(
            "The general environment or setting. Examples: 'futuristic cityscape', 'enchanted forest', "
            "'post-apocalyptic wasteland'."
        ),
        "place": _string(
            "The specific location within the setting. Examples: 'a neon-lit noodle bar', "
            "'a moss-covered ancient ruin', 'an abandoned subway station'."
        ),
        "time": _string(
            "The time of day or era. Examples: 'dusk', 'midnight', '1980s', 'futuristic 2099'."
        ),
        "characters": _string_list(
            "An array of descriptions for the main characters involved."
        ),
        "plot_point": _string(
            "A one-sentence summary of the core action or event, incorporating the action and dialogue "
            "timelines. Example: 'The knight walks while saying \"I will find it\", then points at the audience.'"
        ),
        "duration_second": {
            "type": "INTEGER",
            "description": (
                "The estimated duration of the video in seconds. This should be automatically calculated "
                "from the latest end time found in either the action or dialogue timelines."
            ),
        },
        "aspect_ratio": _string(
            "The aspect ratio of the video. Examples: '16:9', '9:16', '1:1', '4:3'."
        ),
        "negative_prompt": _string(
            "Elements to avoid in the generation. Examples: 'blurry, low quality, watermark, text, signature'."
        ),
    },
    "required": [
        "prompt", "keyword", "style", "tone", "camera", "motion", "angle", "lens", "lighting",
        "audio", "setting", "place", "time", "characters", "plot_point", "duration_second",
        "aspect_ratio", "negative_prompt",
    ],
}

REQUIRED_FIELDS: List[str] = list(VEO_PROMPT_SCHEMA["required"])


def _matches_type(value: Any, spec: Dict[str, Any]) -> bool:
    expected = spec.get("type", "").upper()
    if expected == "STRING":
        return isinstance(value, str)
    if expected == "INTEGER":
        return isinstance(value, int) and not isinstance(value, bool)
    if expected == "NUMBER":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if expected == "BOOLEAN":
        return isinstance(value, bool)
    if expected == "ARRAY":
        items = spec.get("items")
        return isinstance(value, list) and (not items or all(_matches_type(v, items) for v in value))
    if expected == "OBJECT":
        return isinstance(value, dict)
    return True


def validate_prompt(data: Any, schema: Dict[str, Any] = VEO_PROMPT_SCHEMA) -> None:
    if not isinstance(data, dict):
        raise SchemaViolationError("The API response is not a JSON object.")
    missing = [k for k in schema.get("required", []) if k not in data]
    if missing:
        raise SchemaViolationError(f"The API response is missing required fields: {', '.join(missing)}")
    for key, spec in schema.get("properties", {}).items():
        if key in data and not _matches_type(data[key], spec):
            raise SchemaViolationError(f"Field '{key}' should be {spec.get('type', '').lower()}")
