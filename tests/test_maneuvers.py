"""Tests for maneuver translation."""
from dash_nav.core.maneuvers import GENERIC_ICON, ICON_GLYPHS, ICONS, Instruction, translate
from dash_nav.models import ManeuverStep


def test_simple_type_ignores_modifier():
    result = translate(ManeuverStep(type="depart", modifier="right"))
    assert result.text == "Indulj el"
    assert result.icon_key == "car"


def test_turn_uses_modifier_table():
    result = translate(ManeuverStep(type="turn", modifier="left"))
    assert result.text == "Fordulj balra"
    assert result.icon_key == "turn-left"


def test_fork_slight_right():
    result = translate(ManeuverStep(type="fork", modifier="slight right"))
    assert result.text == "Tarts jobbra"


def test_missing_modifier_entry_falls_back_to_composite():
    result = translate(ManeuverStep(type="end of road", modifier="straight"))
    assert result.text == "end of road straight"


def test_table_type_without_modifier_falls_back_to_type():
    assert translate(ManeuverStep(type="turn")).text == "turn"


def test_icon_falls_back_to_type_then_generic():
    # fork-slight left has no icon of its own and "fork" has no type-level icon
    assert translate(ManeuverStep(type="fork", modifier="slight left")).icon_key == GENERIC_ICON
    # merge-left has no specific icon but merge does
    assert translate(ManeuverStep(type="merge", modifier="left")).icon_key == "merge"


def test_every_kind_and_modifier_translates():
    types = [
        "depart", "arrive", "turn", "merge", "on ramp", "off ramp", "fork",
        "end of road", "continue", "roundabout", "exit roundabout", "notification",
    ]
    modifiers = [None, "left", "right", "slight left", "slight right",
                 "sharp left", "sharp right", "straight", "uturn"]
    for t in types:
        for m in modifiers:
            result = translate(ManeuverStep(type=t, modifier=m))
            assert result.text
            assert result.icon_key in ICON_GLYPHS


def test_all_icon_keys_have_glyphs():
    for key in ICONS.values():
        assert key in ICON_GLYPHS


def test_glyph_for_unknown_key_is_generic():
    assert Instruction(text="x", icon_key="nope").glyph == ICON_GLYPHS[GENERIC_ICON]
