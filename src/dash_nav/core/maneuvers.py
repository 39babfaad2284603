"""Hungarian instruction text and icon keys for route maneuvers."""

from pydantic import BaseModel

from dash_nav.models import ManeuverStep

GENERIC_ICON = "arrow"

# A plain string applies to every modifier; a dict is looked up by modifier.
INSTRUCTIONS: dict[str, str | dict[str, str]] = {
    "depart": "Indulj el",
    "arrive": "Megérkezés",
    "turn": {
        "left": "Fordulj balra",
        "right": "Fordulj jobbra",
        "slight left": "Enyhén balra",
        "slight right": "Enyhén jobbra",
        "sharp left": "Élesen balra",
        "sharp right": "Élesen jobbra",
        "straight": "Egyenesen",
        "uturn": "Fordulj vissza",
    },
    "merge": "Sorolj be",
    "on ramp": "Hajts fel",
    "off ramp": "Hajts le",
    "fork": {
        "left": "Tarts balra az elágazásnál",
        "right": "Tarts jobbra az elágazásnál",
        "slight left": "Tarts balra",
        "slight right": "Tarts jobbra",
    },
    "end of road": {
        "left": "Az út végén fordulj balra",
        "right": "Az út végén fordulj jobbra",
    },
    "continue": "Folytatás egyenesen",
    "roundabout": "Körforgalomnál",
    "exit roundabout": "Hagyd el a körforgalmat",
    "notification": "Figyelem",
}

ICONS: dict[str, str] = {
    "depart": "car",
    "arrive": "finish",
    "turn-left": "turn-left",
    "turn-right": "turn-right",
    "turn-slight left": "slight-left",
    "turn-slight right": "slight-right",
    "turn-sharp left": "sharp-left",
    "turn-sharp right": "sharp-right",
    "turn-straight": "straight",
    "turn-uturn": "uturn",
    "merge": "merge",
    "fork-left": "fork-left",
    "fork-right": "fork-right",
    "roundabout": "roundabout",
    "continue": "straight",
}

ICON_GLYPHS: dict[str, str] = {
    "car": "🚗",
    "finish": "🏁",
    "turn-left": "⬅️",
    "turn-right": "➡️",
    "slight-left": "↖️",
    "slight-right": "↗️",
    "sharp-left": "⤴️",
    "sharp-right": "⤵️",
    "straight": "⬆️",
    "uturn": "🔄",
    "merge": "🔀",
    "fork-left": "↙️",
    "fork-right": "↘️",
    "roundabout": "🔄",
    GENERIC_ICON: "➡️",
}


class Instruction(BaseModel):
    text: str
    icon_key: str

    @property
    def glyph(self) -> str:
        return ICON_GLYPHS.get(self.icon_key, ICON_GLYPHS[GENERIC_ICON])


def instruction_text(step_type: str, modifier: str | None) -> str:
    entry = INSTRUCTIONS.get(step_type)
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict) and modifier and modifier in entry:
        return entry[modifier]
    return f"{step_type} {modifier}" if modifier else step_type


def icon_key(step_type: str, modifier: str | None) -> str:
    if modifier:
        key = ICONS.get(f"{step_type}-{modifier}")
        if key:
            return key
    return ICONS.get(step_type, GENERIC_ICON)


def translate(step: ManeuverStep) -> Instruction:
    """Map a maneuver to its instruction text and icon key. Never fails."""
    return Instruction(
        text=instruction_text(step.type, step.modifier),
        icon_key=icon_key(step.type, step.modifier),
    )
