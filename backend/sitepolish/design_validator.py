"""
Static design quality checks. Pure Python, no AI.
Scores a widget structure against the distinctiveness principles the
generator is prompted with.
"""

import re

ASYMMETRIC_LAYOUTS = ("asymmetric", "70-30", "offset", "split", "bento")
GENERIC_LAYOUTS = ("three-column", "centered", "standard-grid")
DISTINCTIVE_LAYOUTS = ("bento", "asymmetric", "diagonal", "masonry", "offset")
GENERIC_PHRASES = (
    "your trusted partner",
    "we deliver excellence",
    "contact us today",
    "learn more",
    "get started",
    "click here",
)


def _sections(structure: dict) -> list:
    return [s for s in (structure or {}).get("sections") or [] if isinstance(s, dict)]


def _layout(section: dict) -> str:
    layout = section.get("layout")
    return layout.lower() if isinstance(layout, str) else ""


def _to_int(value) -> int | None:
    if isinstance(value, (int, float)):
        return int(value)
    match = re.match(r"\s*(-?\d+)", str(value or ""))
    return int(match.group(1)) if match else None


def _is_gradient(background) -> bool:
    if isinstance(background, dict):
        return background.get("type") == "gradient"
    return isinstance(background, str) and "gradient" in background


def _check(name: str, passed: bool, points: int, max_points: int, feedback: str) -> dict:
    return {
        "name": name,
        "passed": passed,
        "points": points,
        "max_points": max_points,
        "feedback": feedback,
    }


def check_asymmetric_layout(structure: dict) -> bool:
    return any(
        pattern in _layout(section)
        for section in _sections(structure)
        for pattern in ASYMMETRIC_LAYOUTS
    )


def check_typography(structure: dict) -> dict:
    sizes = set()
    for section in _sections(structure):
        for widget in section.get("widgets") or []:
            styling = widget.get("styling") or {}
            size = styling.get("fontSize") or widget.get("fontSize")
            if isinstance(size, dict):
                size = size.get("desktop")
            value = _to_int(size)
            if value is not None:
                sizes.add(value)

    passed = len(sizes) >= 3
    return {
        "passed": passed,
        "points": 15 if passed else min(len(sizes) * 5, 15),
        "feedback": (
            f"Good typography hierarchy with {len(sizes)} distinct sizes" if passed
            else f"Only {len(sizes)} font sizes found - add more dramatic size variations"
        ),
    }


def check_color_use(structure: dict) -> dict:
    has_gradients = False
    color_count = 0
    for section in _sections(structure):
        background = section.get("background")
        if _is_gradient(background):
            has_gradients = True
        if isinstance(background, dict) and background.get("color"):
            color_count += 1
        for widget in section.get("widgets") or []:
            styling = widget.get("styling") or {}
            if "gradient" in str(styling.get("background") or ""):
                has_gradients = True
            if styling.get("color") or widget.get("color"):
                color_count += 1

    has_variety = color_count >= 3
    passed = has_gradients and has_variety
    if passed:
        feedback = "Strategic color use with gradients and variety"
    else:
        feedback = " ".join(filter(None, [
            "Add gradients for depth." if not has_gradients else "",
            "Use more color variety" if not has_variety else "",
        ]))
    return {
        "passed": passed,
        "points": (8 if has_gradients else 0) + (7 if has_variety else 0),
        "feedback": feedback,
    }


def check_spacing(structure: dict) -> dict:
    values = set()
    for section in _sections(structure):
        padding = (section.get("styling") or {}).get("padding") or {}
        spacing = section.get("spacing") or {}
        for source in (padding, spacing):
            if not isinstance(source, dict):
                continue
            for side in ("top", "bottom", "left", "right"):
                value = _to_int(source.get(side))
                if value:
                    values.add(value)

    passed = len(values) >= 3
    return {
        "passed": passed,
        "points": 10 if passed else min(len(values) * 3, 10),
        "feedback": (
            f"Good spacing rhythm with {len(values)} different values" if passed
            else f"Only {len(values)} spacing values found - use varied spacing (40px, 64px, 96px, etc.)"
        ),
    }


def check_distinctive_layout(structure: dict) -> dict:
    layouts = [_layout(s) for s in _sections(structure)]
    has_generic = any(p in layout for layout in layouts for p in GENERIC_LAYOUTS)
    has_distinctive = any(p in layout for layout in layouts for p in DISTINCTIVE_LAYOUTS)

    passed = has_distinctive and not has_generic
    return {
        "passed": passed,
        "points": 15 if passed else 10 if has_distinctive else 5,
        "feedback": (
            "Distinctive layout pattern" if passed
            else "Consider more unconventional layout patterns (bento-box, asymmetric grids, etc.)"
        ),
    }


def check_industry_personality(structure: dict) -> dict:
    has_personality = any(
        section.get("decorativeElements")
        or _is_gradient(section.get("background"))
        or "creative" in _layout(section)
        for section in _sections(structure)
    )
    return {
        "passed": has_personality,
        "points": 10 if has_personality else 5,
        "feedback": (
            "Clear industry personality evident" if has_personality
            else "Add more industry-specific personality elements"
        ),
    }


def check_decorative_elements(structure: dict) -> dict:
    count = sum(len(section.get("decorativeElements") or []) for section in _sections(structure))
    passed = count >= 2
    return {
        "passed": passed,
        "points": min(count * 5, 10),
        "feedback": (
            f"{count} decorative elements add distinctiveness" if passed
            else "Add decorative elements (abstract shapes, patterns, etc.)"
        ),
    }


def check_content_specificity(structure: dict) -> dict:
    generic_count = 0
    for section in _sections(structure):
        for widget in section.get("widgets") or []:
            text = widget.get("text")
            if isinstance(text, str):
                lowered = text.lower()
                generic_count += sum(1 for phrase in GENERIC_PHRASES if phrase in lowered)

    passed = generic_count == 0
    return {
        "passed": passed,
        "points": 10 if passed else max(10 - generic_count * 2, 0),
        "feedback": (
            "Content is specific and industry-relevant" if passed
            else f"{generic_count} generic phrases found - make content more specific"
        ),
    }


def validate_design(widget_structure: dict) -> dict:
    """
    Run all eight checks.

    Returns:
        {
            "score": int 0-100,
            "generic_pattern_detected": bool (score < 70),
            "checks": [{"name", "passed", "points", "max_points", "feedback"}],
            "issues": [feedback of failed checks],
            "strengths": [feedback of passed checks],
        }
    """
    asymmetric = check_asymmetric_layout(widget_structure)
    checks = [
        _check(
            "Uses asymmetric layout (not centered everything)",
            asymmetric,
            15 if asymmetric else 0,
            15,
            "Good use of asymmetric layouts" if asymmetric
            else "Design appears to center everything - consider 70/30 splits or offset content",
        ),
    ]

    for name, fn, max_points in (
        ("Typography has 3+ size variations", check_typography, 15),
        ("Color used strategically (not just primary everywhere)", check_color_use, 15),
        ("Spacing is varied and intentional (3+ values)", check_spacing, 10),
        ("Layout pattern is uncommon/distinctive", check_distinctive_layout, 15),
        ("Industry personality is clear", check_industry_personality, 10),
        ("Includes decorative/distinctive elements", check_decorative_elements, 10),
        ("Content is industry-specific (no generic phrases)", check_content_specificity, 10),
    ):
        result = fn(widget_structure)
        checks.append(_check(name, result["passed"], result["points"], max_points, result["feedback"]))

    total = sum(c["points"] for c in checks)
    maximum = sum(c["max_points"] for c in checks)
    score = round(total / maximum * 100)

    return {
        "score": score,
        "generic_pattern_detected": score < 70,
        "checks": checks,
        "issues": [c["feedback"] or c["name"] for c in checks if not c["passed"]],
        "strengths": [c["feedback"] or c["name"] for c in checks if c["passed"]],
    }
