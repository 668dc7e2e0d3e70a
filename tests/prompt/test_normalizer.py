import base64

import pytest

from veoprompt.prompt.errors import InputError
from veoprompt.prompt.models import FormState, ImagePart, ReferenceImage, TextPart, TimedEntry
from veoprompt.prompt.normalizer import (
    IMAGE_CAPTION,
    build_parts,
    build_parts_from_form,
    has_input,
    has_valid_actions,
    has_valid_dialogue,
    render_timeline,
    resolve_preference,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
PNG_B64 = base64.b64encode(PNG_BYTES).decode("ascii")


def test_blank_entries_are_not_valid():
    entries = [TimedEntry("0", "2", ""), TimedEntry("", "", "   \n\t")]
    assert has_valid_actions(entries) is False
    assert has_valid_dialogue(entries) is False
    assert render_timeline(entries) == ""
    assert render_timeline(entries, quote=True) == ""


def test_render_timeline_keeps_input_order_and_defaults():
    entries = [
        TimedEntry("5", "8", " Knight draws sword "),
        TimedEntry("", "", ""),
        TimedEntry("0", "", "Knight walks"),
        TimedEntry("", "3", "Dragon roars"),
    ]
    assert render_timeline(entries) == (
        "- 5–8 sec: Knight draws sword\n"
        "- 0–? sec: Knight walks\n"
        "- 0–3 sec: Dragon roars"
    )


def test_render_timeline_quotes_dialogue():
    entries = [TimedEntry("1", "4", "Mau pergi kemana?")]
    assert render_timeline(entries, quote=True) == '- 1–4 sec: "Mau pergi kemana?"'


def test_render_timeline_custom_defaults():
    entries = [TimedEntry("", "", "Wave")]
    assert render_timeline(entries, empty_start_default="start", empty_end_default="end") == "- start–end sec: Wave"


def test_build_parts_actions_and_dialogue_only():
    parts = build_parts(
        actions=[TimedEntry("0", "2", "Knight walks")],
        dialogues=[TimedEntry("0", "2", "Mau pergi kemana?")],
        image=None,
        camera_movement="Automatic",
        tone="Automatic",
    )
    assert parts == [
        TextPart("ACTION TIMELINE:\n- 0–2 sec: Knight walks"),
        TextPart('DIALOGUE TIMELINE (IN INDONESIAN):\n- 0–2 sec: "Mau pergi kemana?"'),
    ]


def test_build_parts_full_order():
    parts = build_parts(
        actions=[TimedEntry("0", "4", "Cat jumps")],
        dialogues=[TimedEntry("2", "4", "Halo")],
        image=ReferenceImage(data=PNG_B64, mime_type="image/png"),
        camera_movement="Tilt up",
        tone="epic",
    )
    assert [p.kind for p in parts] == ["image", "text", "text", "text", "text", "text"]
    assert parts[0] == ImagePart(data=PNG_BYTES, mime_type="image/png")
    assert parts[1].text == IMAGE_CAPTION
    assert parts[2].text.startswith("ACTION TIMELINE:\n")
    assert parts[3].text.startswith("DIALOGUE TIMELINE (IN INDONESIAN):\n")
    assert parts[4].text == "CAMERA MOVEMENT PREFERENCE: Tilt up"
    assert parts[5].text == "TONE PREFERENCE: epic"


def test_build_parts_skips_invalid_timeline_even_with_other_input():
    parts = build_parts(
        actions=[TimedEntry("0", "2", "  ")],
        dialogues=[TimedEntry("0", "2", "Ayo!")],
        image=ReferenceImage(data=PNG_B64, mime_type="image/png"),
        camera_movement="",
        tone="",
    )
    texts = [p.text for p in parts if isinstance(p, TextPart)]
    assert not any(t.startswith("ACTION TIMELINE") for t in texts)
    assert any(t.startswith("DIALOGUE TIMELINE") for t in texts)

    parts = build_parts(
        actions=[TimedEntry("0", "2", "Run")],
        dialogues=[TimedEntry("", "", "")],
        image=None,
        camera_movement=None,
        tone=None,
    )
    assert parts == [TextPart("ACTION TIMELINE:\n- 0–2 sec: Run")]


@pytest.mark.parametrize("value", ["Automatic", "", None])
def test_build_parts_omits_implicit_preferences(value):
    parts = build_parts([TimedEntry("0", "1", "Run")], [], None, value, value)
    assert len(parts) == 1


def test_build_parts_includes_custom_preference_verbatim():
    parts = build_parts([TimedEntry("0", "1", "Run")], [], None, "slow orbit around the hero", "bittersweet, quiet")
    assert parts[1] == TextPart("CAMERA MOVEMENT PREFERENCE: slow orbit around the hero")
    assert parts[2] == TextPart("TONE PREFERENCE: bittersweet, quiet")


def test_build_parts_rejects_bad_base64():
    with pytest.raises(InputError):
        build_parts([], [], ReferenceImage(data="not base64!!", mime_type="image/jpeg"), None, None)


def test_reference_image_rejects_unsupported_type():
    with pytest.raises(InputError) as exc:
        ReferenceImage(data=PNG_B64, mime_type="image/gif")
    assert "PNG, JPG, or WEBP" in str(exc.value)


def test_resolve_preference():
    assert resolve_preference("custom", "spin fast") == "spin fast"
    assert resolve_preference("custom", None) == ""
    assert resolve_preference("Static", "ignored") == "Static"
    assert resolve_preference("Automatic") == "Automatic"


def test_has_input_and_form_parts():
    empty = FormState(actions=[TimedEntry()], timed_dialogues=[TimedEntry()])
    assert has_input(empty) is False
    assert build_parts_from_form(empty) == []

    with_image = FormState(
        actions=[TimedEntry()],
        timed_dialogues=[TimedEntry()],
        image=ReferenceImage(data=PNG_B64, mime_type="image/png"),
    )
    assert has_input(with_image) is True
    assert isinstance(with_image.actions, tuple)
    assert [p.kind for p in build_parts_from_form(with_image)] == ["image", "text"]
