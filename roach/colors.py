# roach/colors.py

from typing import Dict

ANSI = {
    "black": 30, "red": 31, "green": 32, "yellow": 33,
    "blue": 34, "magenta": 35, "cyan": 36, "white": 37, "gray": 90,
    "redBright": 91, "greenBright": 92, "yellowBright": 93, "blueBright": 94,
    "magentaBright": 95, "cyanBright": 96, "whiteBright": 97, "blackBright": 90,
}

IRR_COLORS = {
    "RIPE": "blue",
    "RADB": "green",
    "ARIN": "magenta",
    "LACNIC": "yellow",
    "APNIC": "cyan",
    "AFRINIC": "red",
    "RPKI": "white",
    "ALTDB": "gray",
    "BELL": "blueBright",
    "LEVEL3": "greenBright",
    "NTTCOM": "magentaBright",
    "TC": "yellowBright",
}

DYNAMIC_COLORS = ("redBright", "cyanBright", "whiteBright", "blackBright")

CATEGORY_COLORS = {
    "success": "green",
    "warning": "yellow",
    "danger": "red",
    "info": "blue",
}


class ColorPalette:
    """
    Colour lookups for the terminal renderer.

    Registries without a fixed colour get one from DYNAMIC_COLORS round-robin
    and keep it for the lifetime of the palette.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._dynamic: Dict[str, str] = {}

    def irr_color(self, registry: str) -> str:
        fixed = IRR_COLORS.get(registry)
        if fixed:
            return fixed
        if registry not in self._dynamic:
            self._dynamic[registry] = DYNAMIC_COLORS[len(self._dynamic) % len(DYNAMIC_COLORS)]
        return self._dynamic[registry]

    @staticmethod
    def rpki_color(status: str) -> str:
        status = status.upper()
        if status == "VALID":
            return "green"
        if status == "INVALID":
            return "red"
        return "yellow"

    def irr_color_with_rpki(self, registry: str, status: str) -> str:
        if status.upper() == "INVALID":
            return "red"
        return self.irr_color(registry)

    def paint(self, text: str, color: str, bold: bool = False) -> str:
        if not self.enabled:
            return text
        codes = [str(ANSI.get(color, 37))]
        if bold:
            codes.insert(0, "1")
        return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"
