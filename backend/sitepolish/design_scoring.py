"""
Quick per-variation scores stored on each design record.
"""

from sitepolish.colors import check_contrast, get_header_text_color


def _body_widgets(variation: dict):
    for section in (variation.get("widgetStructure") or {}).get("sections") or []:
        for widget in section.get("widgets") or []:
            if isinstance(widget, dict):
                yield widget


def _font_size(widget: dict) -> float | None:
    size = widget.get("fontSize")
    if isinstance(size, (int, float)):
        return size
    if isinstance(size, str):
        digits = size.strip().removesuffix("px")
        try:
            return float(digits)
        except ValueError:
            return None
    return None


def accessibility_score(variation: dict) -> int:
    """
    Start at 100. Header contrast failing AA costs 25, passing every contrast
    check earns 10. Small body text costs 10, a small h1 costs 5.
    """
    score = 100
    contrast_checks = 0
    contrast_passes = 0

    header = (variation.get("widgetStructure") or {}).get("globalHeader") or {}
    header_bg = header.get("backgroundColor")
    if header_bg:
        text_color = get_header_text_color(header_bg)
        try:
            contrast = check_contrast(text_color, header_bg)
        except ValueError:
            print(f"  [scoring] Skipping header contrast, unreadable color {header_bg!r}")
            contrast = None
        if contrast:
            contrast_checks += 1
            if contrast["passes_aa"]:
                contrast_passes += 1
            else:
                score -= 25
                print(f"  [scoring] Header contrast fails: {text_color} on {header_bg} = {contrast['ratio']}:1")

    for widget in _body_widgets(variation):
        size = _font_size(widget)
        if size is None:
            continue
        if widget.get("type") == "text-editor" and size < 16:
            score -= 10
        if widget.get("type") == "heading" and widget.get("level") == "h1" and size < 32:
            score -= 5

    if contrast_checks and contrast_passes == contrast_checks:
        score += 10

    return max(0, min(100, score))


def distinctiveness_score(variation: dict) -> int:
    decisions = variation.get("designDecisions") or {}
    score = 80
    if "asymmetric" in str(decisions.get("asymmetry") or "").lower():
        score += 10
    if "varied" in str(decisions.get("spacingSystem") or "").lower():
        score += 10
    return min(100, score)


def estimate_build_time(structure: dict) -> int:
    """Minutes: 15 base plus 5 per body widget."""
    widget_count = sum(
        len(section.get("widgets") or [])
        for section in (structure or {}).get("sections") or []
    )
    return 15 + widget_count * 5


def quality_issues(variation: dict, accessibility: int) -> list:
    issues = []
    if accessibility < 80:
        issues.append("Some accessibility improvements needed")
    if accessibility < 60:
        issues.append("Significant accessibility issues detected")
    return issues


def quality_strengths(variation: dict, distinctiveness: int) -> list:
    decisions = variation.get("designDecisions") or {}
    strengths = []
    if distinctiveness >= 90:
        strengths.append("Highly distinctive design")
    if "asymmetric" in str(decisions.get("asymmetry") or "").lower():
        strengths.append("Effective use of asymmetric layouts")
    if "varied" in str(decisions.get("spacingSystem") or "").lower():
        strengths.append("Dynamic spacing creates visual interest")
    return strengths
