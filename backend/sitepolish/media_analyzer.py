"""
Count how many stock images and videos a widget structure needs,
so media is fetched on demand rather than up front.
"""


def _empty_requirements() -> dict:
    return {
        "images": 0,
        "videos": 0,
        "total": 0,
        "has_image_widgets": False,
        "has_video_widgets": False,
        "widget_types": [],
    }


def _scan_widgets(widgets, req: dict):
    if not isinstance(widgets, list):
        return

    for widget in widgets:
        if not isinstance(widget, dict):
            continue
        widget_type = (widget.get("type") or "").lower()
        if widget_type and widget_type not in req["widget_types"]:
            req["widget_types"].append(widget_type)

        images = 0
        videos = 0
        if widget_type in ("image", "image-box", "team-member"):
            images = 1
        elif widget_type in ("image-carousel", "image-gallery"):
            images = widget.get("imageCount") or len(widget.get("images") or []) or 4
        elif widget_type == "icon-box":
            if widget.get("backgroundImage") or widget.get("imageUrl"):
                images = 1
        elif widget_type in ("hero-banner", "call-to-action"):
            if widget.get("backgroundType") == "image" or widget.get("backgroundImage"):
                images = 1
        elif widget_type == "testimonial":
            if widget.get("showPhoto") or widget.get("imageUrl"):
                images = 1
        elif widget_type in ("video", "video-player"):
            videos = 1
        elif widget_type in ("video-carousel", "video-gallery"):
            videos = widget.get("videoCount") or len(widget.get("videos") or []) or 3

        if images:
            req["images"] += images
            req["has_image_widgets"] = True
        if videos:
            req["videos"] += videos
            req["has_video_widgets"] = True

        # Nested containers
        if widget.get("widgets"):
            _scan_widgets(widget["widgets"], req)
        for column in widget.get("columns") or []:
            if isinstance(column, dict) and column.get("widgets"):
                _scan_widgets(column["widgets"], req)


def analyze_media_requirements(widget_structure: dict) -> dict:
    """
    Media needed by one widget structure. Scans the global header and footer,
    every section, and a top-level widgets list if present.
    """
    req = _empty_requirements()
    if not isinstance(widget_structure, dict):
        return req

    for key in ("globalHeader", "globalFooter"):
        block = widget_structure.get(key)
        if isinstance(block, dict):
            _scan_widgets(block.get("widgets"), req)

    for section in widget_structure.get("sections") or []:
        if isinstance(section, dict):
            _scan_widgets(section.get("widgets"), req)

    _scan_widgets(widget_structure.get("widgets"), req)
    req["total"] = req["images"] + req["videos"]
    return req


def analyze_all_variations(variations: list[dict]) -> dict:
    """The largest requirement of each kind across all variations."""
    total = _empty_requirements()
    for variation in variations:
        req = analyze_media_requirements(variation.get("widgetStructure") or {})
        total["images"] = max(total["images"], req["images"])
        total["videos"] = max(total["videos"], req["videos"])
        total["total"] = total["images"] + total["videos"]
        total["has_image_widgets"] = total["has_image_widgets"] or req["has_image_widgets"]
        total["has_video_widgets"] = total["has_video_widgets"] or req["has_video_widgets"]
        for widget_type in req["widget_types"]:
            if widget_type not in total["widget_types"]:
                total["widget_types"].append(widget_type)
    return total
