import pytest


@pytest.fixture
def sample_prompt():
    def _make():
        return {
            "prompt": "A knight walks through a misty forest and asks where you are going.",
            "keyword": ["knight", "forest", "walk"],
            "style": "cinematic",
            "tone": "mysterious",
            "camera": "DSLR",
            "motion": "slow tracking shot",
            "angle": "eye-level",
            "lens": "wide-angle",
            "lighting": "moonlight",
            "audio": 'A character speaks: "Mau pergi kemana?"',
            "setting": "enchanted forest",
            "place": "a moss-covered ancient ruin",
            "time": "midnight",
            "characters": ["a knight in battered armor"],
            "plot_point": 'The knight walks while saying "Mau pergi kemana?".',
            "duration_second": 2,
            "aspect_ratio": "16:9",
            "negative_prompt": "blurry, low quality, watermark",
        }
    return _make
