"""
Color math: WCAG contrast checks, palette harmonies and tint/shade variations.

Lightness adjustments (brighten/darken) move the CIE L*a*b* lightness by
18 units per step, hue rotations happen in HSL.
"""

import colorsys
import re


HARMONY_TYPES = (
    "complementary",
    "split-complementary",
    "analogous",
    "triadic",
    "tetradic",
    "monochromatic",
)

NEUTRALS = ["#FFFFFF", "#F5F5F5", "#333333"]

# CSS Color Module Level 4 named colors
NAMED_COLORS = {
    "aliceblue": "#f0f8ff", "antiquewhite": "#faebd7", "aqua": "#00ffff", "aquamarine": "#7fffd4",
    "azure": "#f0ffff", "beige": "#f5f5dc", "bisque": "#ffe4c4", "black": "#000000",
    "blanchedalmond": "#ffebcd", "blue": "#0000ff", "blueviolet": "#8a2be2", "brown": "#a52a2a",
    "burlywood": "#deb887", "cadetblue": "#5f9ea0", "chartreuse": "#7fff00", "chocolate": "#d2691e",
    "coral": "#ff7f50", "cornflowerblue": "#6495ed", "cornsilk": "#fff8dc", "crimson": "#dc143c",
    "cyan": "#00ffff", "darkblue": "#00008b", "darkcyan": "#008b8b", "darkgoldenrod": "#b8860b",
    "darkgray": "#a9a9a9", "darkgreen": "#006400", "darkgrey": "#a9a9a9", "darkkhaki": "#bdb76b",
    "darkmagenta": "#8b008b", "darkolivegreen": "#556b2f", "darkorange": "#ff8c00", "darkorchid": "#9932cc",
    "darkred": "#8b0000", "darksalmon": "#e9967a", "darkseagreen": "#8fbc8f", "darkslateblue": "#483d8b",
    "darkslategray": "#2f4f4f", "darkslategrey": "#2f4f4f", "darkturquoise": "#00ced1", "darkviolet": "#9400d3",
    "deeppink": "#ff1493", "deepskyblue": "#00bfff", "dimgray": "#696969", "dimgrey": "#696969",
    "dodgerblue": "#1e90ff", "firebrick": "#b22222", "floralwhite": "#fffaf0", "forestgreen": "#228b22",
    "fuchsia": "#ff00ff", "gainsboro": "#dcdcdc", "ghostwhite": "#f8f8ff", "gold": "#ffd700",
    "goldenrod": "#daa520", "gray": "#808080", "green": "#008000", "greenyellow": "#adff2f",
    "grey": "#808080", "honeydew": "#f0fff0", "hotpink": "#ff69b4", "indianred": "#cd5c5c",
    "indigo": "#4b0082", "ivory": "#fffff0", "khaki": "#f0e68c", "lavender": "#e6e6fa",
    "lavenderblush": "#fff0f5", "lawngreen": "#7cfc00", "lemonchiffon": "#fffacd", "lightblue": "#add8e6",
    "lightcoral": "#f08080", "lightcyan": "#e0ffff", "lightgoldenrodyellow": "#fafad2", "lightgray": "#d3d3d3",
    "lightgreen": "#90ee90", "lightgrey": "#d3d3d3", "lightpink": "#ffb6c1", "lightsalmon": "#ffa07a",
    "lightseagreen": "#20b2aa", "lightskyblue": "#87cefa", "lightslategray": "#778899", "lightslategrey": "#778899",
    "lightsteelblue": "#b0c4de", "lightyellow": "#ffffe0", "lime": "#00ff00", "limegreen": "#32cd32",
    "linen": "#faf0e6", "magenta": "#ff00ff", "maroon": "#800000", "mediumaquamarine": "#66cdaa",
    "mediumblue": "#0000cd", "mediumorchid": "#ba55d3", "mediumpurple": "#9370db", "mediumseagreen": "#3cb371",
    "mediumslateblue": "#7b68ee", "mediumspringgreen": "#00fa9a", "mediumturquoise": "#48d1cc",
    "mediumvioletred": "#c71585", "midnightblue": "#191970", "mintcream": "#f5fffa", "mistyrose": "#ffe4e1",
    "moccasin": "#ffe4b5", "navajowhite": "#ffdead", "navy": "#000080", "oldlace": "#fdf5e6",
    "olive": "#808000", "olivedrab": "#6b8e23", "orange": "#ffa500", "orangered": "#ff4500",
    "orchid": "#da70d6", "palegoldenrod": "#eee8aa", "palegreen": "#98fb98", "paleturquoise": "#afeeee",
    "palevioletred": "#db7093", "papayawhip": "#ffefd5", "peachpuff": "#ffdab9", "peru": "#cd853f",
    "pink": "#ffc0cb", "plum": "#dda0dd", "powderblue": "#b0e0e6", "purple": "#800080",
    "rebeccapurple": "#663399", "red": "#ff0000", "rosybrown": "#bc8f8f", "royalblue": "#4169e1",
    "saddlebrown": "#8b4513", "salmon": "#fa8072", "sandybrown": "#f4a460", "seagreen": "#2e8b57",
    "seashell": "#fff5ee", "sienna": "#a0522d", "silver": "#c0c0c0", "skyblue": "#87ceeb",
    "slateblue": "#6a5acd", "slategray": "#708090", "slategrey": "#708090", "snow": "#fffafa",
    "springgreen": "#00ff7f", "steelblue": "#4682b4", "tan": "#d2b48c", "teal": "#008080",
    "thistle": "#d8bfd8", "tomato": "#ff6347", "turquoise": "#40e0d0", "violet": "#ee82ee",
    "wheat": "#f5deb3", "white": "#ffffff", "whitesmoke": "#f5f5f5", "yellow": "#ffff00",
    "yellowgreen": "#9acd32",
    # Treated as the page background
    "transparent": "#ffffff",
}

# D65 reference white
_XN, _YN, _ZN = 0.950470, 1.0, 1.088830
_LAB_STEP = 18


# ---------------------------------------------------------------------------
# Parsing / formatting
# ---------------------------------------------------------------------------

def parse_color(color: str) -> tuple[int, int, int]:
    """Parse #rgb, #rrggbb, #rrggbbaa, rgb()/rgba(), hsl()/hsla() or a CSS color name. Raises ValueError."""
    if not isinstance(color, str):
        raise ValueError(f"Invalid color: {color!r}")
    value = color.strip().lower()
    value = NAMED_COLORS.get(value, value)

    if value.startswith("#"):
        hex_part = value[1:]
        if len(hex_part) in (3, 4):
            hex_part = "".join(c * 2 for c in hex_part[:3])
        if len(hex_part) in (6, 8) and re.fullmatch(r"[0-9a-f]+", hex_part):
            return int(hex_part[0:2], 16), int(hex_part[2:4], 16), int(hex_part[4:6], 16)

    match = re.match(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)", value)
    if match:
        r, g, b = (min(int(x), 255) for x in match.groups())
        return r, g, b

    match = re.match(r"hsla?\(\s*(-?[\d.]+)(?:deg)?[\s,]+([\d.]+)%[\s,]+([\d.]+)%", value)
    if match:
        h, s, l = (float(x) for x in match.groups())
        r, g, b = colorsys.hls_to_rgb((h % 360) / 360, min(l, 100) / 100, min(s, 100) / 100)
        return round(r * 255), round(g * 255), round(b * 255)

    raise ValueError(f"Invalid color: {color!r}")


def to_hex(rgb: tuple) -> str:
    r, g, b = (max(0, min(255, round(c))) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def is_valid_color(color) -> bool:
    try:
        parse_color(color)
        return True
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# Luminance and contrast
# ---------------------------------------------------------------------------

def _channel_to_linear(c: float) -> float:
    c = c / 255
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def _linear_to_channel(c: float) -> float:
    c = 12.92 * c if c <= 0.0031308 else 1.055 * c ** (1 / 2.4) - 0.055
    return c * 255


def luminance(color: str) -> float:
    """WCAG relative luminance (0 for black, 1 for white)."""
    r, g, b = (_channel_to_linear(c) for c in parse_color(color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: str, background: str) -> float:
    l1 = luminance(foreground)
    l2 = luminance(background)
    if l1 < l2:
        l1, l2 = l2, l1
    return (l1 + 0.05) / (l2 + 0.05)


def check_contrast(foreground: str, background: str, large_text: bool = False) -> dict:
    """
    WCAG contrast check.
    AA needs 4.5:1 (3:1 for large text), AAA needs 7:1 (4.5:1 for large text).
    """
    ratio = contrast_ratio(foreground, background)
    aa_threshold = 3 if large_text else 4.5
    aaa_threshold = 4.5 if large_text else 7

    passes_aa = ratio >= aa_threshold
    passes_aaa = ratio >= aaa_threshold
    level = "AAA" if passes_aaa else "AA" if passes_aa else "Fail"

    return {
        "ratio": round(ratio, 2),
        "passes_aa": passes_aa,
        "passes_aaa": passes_aaa,
        "level": level,
    }


def evaluate_color_palette(colors: list[str], text_color: str = "#333333",
                           background_color: str = "#FFFFFF") -> dict:
    """Score a palette for readability against the page background."""
    issues = []
    passes = []

    text_contrast = check_contrast(text_color, background_color)
    if not text_contrast["passes_aa"]:
        issues.append(
            f"Text color {text_color} on {background_color} fails WCAG AA (ratio: {text_contrast['ratio']}:1)"
        )
    else:
        passes.append(f"Text contrast {text_contrast['level']} compliant ({text_contrast['ratio']}:1)")

    for color in colors:
        if color.upper() in ("#FFFFFF", "#F5F5F5"):
            continue
        contrast = check_contrast(color, background_color)
        if not contrast["passes_aa"]:
            issues.append(
                f"Color {color} may be difficult to read on white background (ratio: {contrast['ratio']}:1)"
            )

    total_checks = 1 + len(colors)
    passed_checks = len(passes) + (len(colors) - len(issues) + 1)
    score = round(passed_checks / total_checks * 100)

    return {"score": max(0, min(score, 100)), "issues": issues, "passes": passes}


# ---------------------------------------------------------------------------
# Lab lightness adjustments
# ---------------------------------------------------------------------------

def _lab_f(t: float) -> float:
    return t ** (1 / 3) if t > (6 / 29) ** 3 else t / (3 * (6 / 29) ** 2) + 4 / 29


def _lab_f_inv(t: float) -> float:
    return t ** 3 if t > 6 / 29 else 3 * (6 / 29) ** 2 * (t - 4 / 29)


def _to_lab(color: str) -> tuple[float, float, float]:
    r, g, b = (_channel_to_linear(c) for c in parse_color(color))
    x = (0.4124564 * r + 0.3575761 * g + 0.1804375 * b) / _XN
    y = (0.2126729 * r + 0.7151522 * g + 0.0721750 * b) / _YN
    z = (0.0193339 * r + 0.1191920 * g + 0.9503041 * b) / _ZN
    fx, fy, fz = _lab_f(x), _lab_f(y), _lab_f(z)
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)


def _from_lab(lab: tuple[float, float, float]) -> str:
    l, a, b = lab
    fy = (l + 16) / 116
    x = _lab_f_inv(fy + a / 500) * _XN
    y = _lab_f_inv(fy) * _YN
    z = _lab_f_inv(fy - b / 200) * _ZN
    r = 3.2404542 * x - 1.5371385 * y - 0.4985314 * z
    g = -0.9692660 * x + 1.8760108 * y + 0.0415560 * z
    bl = 0.0556434 * x - 0.2040259 * y + 1.0572252 * z
    return to_hex(tuple(_linear_to_channel(max(0.0, min(1.0, c))) for c in (r, g, bl)))


def darken(color: str, amount: float = 1) -> str:
    l, a, b = _to_lab(color)
    return _from_lab((l - _LAB_STEP * amount, a, b))


def brighten(color: str, amount: float = 1) -> str:
    return darken(color, -amount)


def rotate_hue(color: str, degrees: float) -> str:
    r, g, b = parse_color(color)
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    h = (h + degrees / 360) % 1
    return to_hex(tuple(c * 255 for c in colorsys.hls_to_rgb(h, l, s)))


# ---------------------------------------------------------------------------
# Accessible color helpers
# ---------------------------------------------------------------------------

def suggest_accessible_color(foreground: str, background: str, target_ratio: float = 4.5) -> str:
    """Darken (then, failing that, brighten) foreground until it reaches target_ratio."""
    adjusted = to_hex(parse_color(foreground))
    attempts = 0
    while contrast_ratio(adjusted, background) < target_ratio and attempts < 20:
        adjusted = darken(adjusted, 0.2)
        attempts += 1

    if contrast_ratio(adjusted, background) < target_ratio:
        adjusted = to_hex(parse_color(foreground))
        attempts = 0
        while contrast_ratio(adjusted, background) < target_ratio and attempts < 20:
            adjusted = brighten(adjusted, 0.2)
            attempts += 1

    return adjusted


def is_light_color(color: str) -> bool:
    """Light means relative luminance above 0.5. Unparseable colors count as light."""
    try:
        return luminance(color) > 0.5
    except ValueError as e:
        print(f"  [colors] Could not read color {color!r}: {e}")
        return True


def get_contrast_safe_text_color(background_color: str, target_ratio: float = 4.5) -> str:
    """Near-black on light backgrounds, white on dark ones, adjusted to target_ratio."""
    try:
        text_color = "#1a1a1a" if is_light_color(background_color) else "#ffffff"
        if contrast_ratio(text_color, background_color) < target_ratio:
            text_color = suggest_accessible_color(text_color, background_color, target_ratio)
        return text_color
    except ValueError:
        return "#1a1a1a"


def get_header_text_color(background_color: str) -> str:
    """Navigation text color for a header background. Mid-tones fall back to pure black or white."""
    try:
        text_color = "#2d3748" if is_light_color(background_color) else "#ffffff"
        if contrast_ratio(text_color, background_color) >= 4.5:
            return text_color
        text_color = suggest_accessible_color(text_color, background_color, 4.5)
        if contrast_ratio(text_color, background_color) >= 4.5:
            return text_color
    except ValueError as e:
        print(f"  [colors] Could not read header color {background_color!r}: {e}")
        return "#ffffff"
    return max(("#000000", "#ffffff"), key=lambda c: contrast_ratio(c, background_color))


def get_button_colors(brand_color: str) -> dict:
    return {
        "background": brand_color,
        "text": get_contrast_safe_text_color(brand_color, 4.5),
    }


# ---------------------------------------------------------------------------
# Harmonies
# ---------------------------------------------------------------------------

def generate_color_harmony(base_color: str, harmony: str = "complementary") -> dict:
    """
    Build a palette around base_color. Raises ValueError for an unknown harmony
    or an unparseable color. Three neutrals are always appended.
    """
    parse_color(base_color)

    if harmony == "complementary":
        colors = [base_color, rotate_hue(base_color, 180)]
    elif harmony == "split-complementary":
        colors = [base_color, rotate_hue(base_color, 150), rotate_hue(base_color, -150)]
    elif harmony == "analogous":
        colors = [rotate_hue(base_color, -30), base_color, rotate_hue(base_color, 30)]
    elif harmony == "triadic":
        colors = [base_color, rotate_hue(base_color, 120), rotate_hue(base_color, -120)]
    elif harmony == "tetradic":
        colors = [
            base_color,
            rotate_hue(base_color, 90),
            rotate_hue(base_color, 180),
            rotate_hue(base_color, -90),
        ]
    elif harmony == "monochromatic":
        colors = [brighten(base_color, 1), base_color, darken(base_color, 1), darken(base_color, 2)]
    else:
        raise ValueError(f"Unknown harmony type: {harmony}")

    return {"colors": colors + NEUTRALS, "harmony": harmony, "base_color": base_color}


def generate_color_variations(base_color: str) -> dict:
    return {
        "lighter": [brighten(base_color, step) for step in (0.5, 1, 1.5)],
        "darker": [darken(base_color, step) for step in (0.5, 1, 1.5)],
    }
