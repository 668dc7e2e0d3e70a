"""
Turns the submitted form into the ordered request parts sent to the model.

Part order is image, action timeline, dialogue timeline, camera preference,
tone preference. The model conditions on that order, so it is fixed.
"""

import base64
import binascii
from typing import Iterable, List, Optional

from .errors import InputError
from .models import (
    AUTOMATIC,
    CUSTOM,
    FormState,
    ImagePart,
    ReferenceImage,
    RequestPart,
    TextPart,
    TimedEntry,
)

IMAGE_CAPTION = "The user has provided the above image as a visual reference."
ACTION_HEADER = "ACTION TIMELINE:"
DIALOGUE_HEADER = "DIALOGUE TIMELINE (IN INDONESIAN):"
CAMERA_HEADER = "CAMERA MOVEMENT PREFERENCE:"
TONE_HEADER = "TONE PREFERENCE:"


def has_valid_actions(entries: Iterable[TimedEntry]) -> bool:
    return any(e.is_valid for e in entries)


def has_valid_dialogue(entries: Iterable[TimedEntry]) -> bool:
    return any(e.is_valid for e in entries)


def has_input(form: FormState) -> bool:
    return (
        has_valid_actions(form.actions)
        or has_valid_dialogue(form.timed_dialogues)
        or form.image is not None
    )


def render_timeline(
    entries: Iterable[TimedEntry],
    quote: bool = False,
    empty_start_default: str = "0",
    empty_end_default: str = "?",
) -> str:
    """
    Render valid entries as ``- start–end sec: text`` lines, in input order.

    Args:
        entries: Timeline entries; blank ones are skipped.
        quote: Wrap the text in double quotes (dialogue lines).
        empty_start_default: Shown when an entry has no start time.
        empty_end_default: Shown when an entry has no end time.

    Returns:
        str: Newline-joined lines, or "" when no entry is valid.
    """
    lines = []
    for entry in entries:
        if not entry.is_valid:
            continue
        text = entry.text.strip()
        if quote:
            text = f'"{text}"'
        start = entry.start_time or empty_start_default
        end = entry.end_time or empty_end_default
        lines.append(f"- {start}–{end} sec: {text}")
    return "\n".join(lines)


def resolve_preference(selected: str, custom: Optional[str] = None) -> str:
    """The form's "custom" option is replaced by the user's free text."""
    if selected == CUSTOM:
        return custom or ""
    return selected


def _is_explicit(preference: Optional[str]) -> bool:
    return bool(preference) and preference != AUTOMATIC


def _decode_image(image: ReferenceImage) -> ImagePart:
    try:
        data = base64.b64decode(image.data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InputError("Reference image data is not valid base64.") from exc
    return ImagePart(data=data, mime_type=image.mime_type)


def build_parts(
    actions: Iterable[TimedEntry],
    dialogues: Iterable[TimedEntry],
    image: Optional[ReferenceImage],
    camera_movement: Optional[str],
    tone: Optional[str],
) -> List[RequestPart]:
    actions = list(actions)
    dialogues = list(dialogues)
    parts: List[RequestPart] = []

    if image is not None:
        parts.append(_decode_image(image))
        parts.append(TextPart(IMAGE_CAPTION))

    if has_valid_actions(actions):
        parts.append(TextPart(f"{ACTION_HEADER}\n{render_timeline(actions)}"))

    if has_valid_dialogue(dialogues):
        parts.append(TextPart(f"{DIALOGUE_HEADER}\n{render_timeline(dialogues, quote=True)}"))

    if _is_explicit(camera_movement):
        parts.append(TextPart(f"{CAMERA_HEADER} {camera_movement}"))

    if _is_explicit(tone):
        parts.append(TextPart(f"{TONE_HEADER} {tone}"))

    return parts


def build_parts_from_form(form: FormState) -> List[RequestPart]:
    return build_parts(
        form.actions,
        form.timed_dialogues,
        form.image,
        form.camera_movement,
        form.tone,
    )
