import pytest

from tetris_autopilot.config import AutopilotConfig


@pytest.mark.parametrize(
    "field,value", [("start_level", -1), ("reaction_time", -3), ("fps", 0)]
)
def test_invalid_settings_rejected(field, value):
    with pytest.raises(ValueError):
        AutopilotConfig(**{field: value})
