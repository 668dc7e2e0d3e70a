from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple, Union

from .errors import InputError

AUTOMATIC = "Automatic"
CUSTOM = "custom"

SUPPORTED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")

CAMERA_MOVEMENT_OPTIONS = (
    AUTOMATIC, "Point up", "Point down", "Point right", "Point left",
    "Point closer", "Point away", "Swipe right", "Swipe left", "Tilt up",
    "Tilt down", "Rotate right", "Rotate left", "Static", CUSTOM,
)

TONE_OPTIONS = (
    AUTOMATIC, "normal", "dramatic", "comedic", "mysterious", "epic",
    "serene", "suspenseful", "singing", "scream", CUSTOM,
)


@dataclass(frozen=True)
class TimedEntry:
    start_time: str = ""
    end_time: str = ""
    text: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.text.strip())


@dataclass(frozen=True)
class ReferenceImage:
    data: str  # base64
    mime_type: str

    def __post_init__(self):
        if self.mime_type not in SUPPORTED_IMAGE_TYPES:
            raise InputError("Invalid file type. Please select a PNG, JPG, or WEBP image.")


@dataclass(frozen=True)
class FormState:
    """Snapshot of the submitted form, consumed once by the requester."""

    actions: Tuple[TimedEntry, ...] = field(default_factory=tuple)
    timed_dialogues: Tuple[TimedEntry, ...] = field(default_factory=tuple)
    camera_movement: str = AUTOMATIC
    tone: str = AUTOMATIC
    image: Optional[ReferenceImage] = None

    def __post_init__(self):
        object.__setattr__(self, "actions", tuple(self.actions))
        object.__setattr__(self, "timed_dialogues", tuple(self.timed_dialogues))


@dataclass(frozen=True)
class ImagePart:
    data: bytes
    mime_type: str
    kind: Literal["image"] = "image"


@dataclass(frozen=True)
class TextPart:
    text: str
    kind: Literal["text"] = "text"


RequestPart = Union[ImagePart, TextPart]
