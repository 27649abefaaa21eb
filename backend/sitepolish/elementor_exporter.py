"""
Export a design's widget structure as an Elementor v0.4 page document
(container-based layout: no sections/columns).
"""

import json
import re

from sitepolish.elementor_html import generate_elementor_id


def _widget(widget_type: str, settings: dict) -> dict:
    return {
        "id": generate_elementor_id(),
        "elType": "widget",
        "widgetType": widget_type,
        "isInner": False,
        "settings": settings,
    }


def _icon(value: str | None) -> dict:
    return {"value": value or "fas fa-star", "library": "fa-solid"}


def convert_widget(widget: dict) -> dict | None:
    """
    Map one widget to Elementor's schema. global-header/global-footer entries
    return None; unknown types pass through with only the base settings.
    """
    if not isinstance(widget, dict) or not widget.get("type"):
        return None

    widget_type = widget["type"]
    base = {"_element_id": widget.get("id") or ""}

    if widget_type in ("global-header", "global-footer"):
        return None

    if widget_type == "heading":
        return _widget("heading", {
            **base,
            "title": widget.get("text") or "",
            "header_size": widget.get("level") or "h2",
            "align": widget.get("position") or "left",
        })

    if widget_type == "text-editor":
        return _widget("text-editor", {**base, "editor": widget.get("text") or ""})

    if widget_type == "button":
        return _widget("button", {
            **base,
            "text": widget.get("text") or "Click Here",
            "link": {"url": widget.get("link") or "#", "is_external": False, "nofollow": False},
            "size": widget.get("size") or "sm",
            "align": widget.get("position") or "left",
        })

    if widget_type == "image":
        return _widget("image", {
            **base,
            "image": {"url": widget.get("url") or ""},
            "image_size": "large",
            "align": widget.get("position") or "center",
        })

    if widget_type == "video":
        url = widget.get("url") or ""
        return _widget("video", {
            **base,
            "video_type": "youtube" if "youtube" in url else "hosted",
            "youtube_url": url,
            "hosted_url": {"url": url},
            "aspect_ratio": "169",
        })

    if widget_type == "divider":
        return _widget("divider", {
            **base,
            "style": widget.get("style") or "solid",
            "weight": {"size": widget.get("width") or 1, "unit": "px"},
        })

    if widget_type == "spacer":
        return _widget("spacer", {**base, "space": {"size": widget.get("height") or 50, "unit": "px"}})

    if widget_type == "google_maps":
        return _widget("google_maps", {
            **base,
            "address": widget.get("address") or "New York, NY",
            "zoom": {"size": widget.get("zoom") or 12},
        })

    if widget_type == "icon":
        return _widget("icon", {
            **base,
            "selected_icon": _icon(widget.get("icon")),
            "view": widget.get("view") or "default",
        })

    if widget_type == "icon-box":
        if widget.get("isHeader"):
            return _widget("icon-box", {
                **base,
                "selected_icon": _icon(f"fas fa-{widget.get('icon') or 'phone'}"),
                "title_text": widget.get("text") or "",
                "description_text": widget.get("description") or "",
                "position": "left",
            })
        return _widget("icon-box", {
            **base,
            "selected_icon": _icon(widget.get("icon")),
            "title_text": widget.get("title") or "Feature Title",
            "description_text": widget.get("description") or "Feature description.",
        })

    if widget_type == "image-box":
        return _widget("image-box", {
            **base,
            "image": {"url": widget.get("url") or ""},
            "title_text": widget.get("title") or "Image Box Title",
            "description_text": widget.get("description") or "Description text.",
        })

    if widget_type == "testimonial":
        return _widget("testimonial", {
            **base,
            "testimonial_content": widget.get("text") or "Great testimonial.",
            "testimonial_name": widget.get("name") or "John Doe",
            "testimonial_job": widget.get("position") or "Customer",
        })

    if widget_type == "star-rating":
        return _widget("star-rating", {**base, "rating": {"size": widget.get("rating") or 5}})

    if widget_type == "social-icons":
        return _widget("social-icons", {**base, "social_icon_list": widget.get("icons") or []})

    if widget_type == "counter":
        return _widget("counter", {
            **base,
            "ending_number": widget.get("endNumber") or 100,
            "title": widget.get("title") or "Counter",
        })

    if widget_type in ("progress", "progress-bar"):
        return _widget("progress", {
            **base,
            "title": widget.get("title") or "Skill",
            "percent": {"size": widget.get("percent") or 80},
        })

    if widget_type in ("accordion", "toggle"):
        return _widget(widget_type, {**base, "tabs": widget.get("items") or []})

    if widget_type == "tabs":
        return _widget("tabs", {**base, "tabs": widget.get("tabs") or []})

    if widget_type == "alert":
        return _widget("alert", {
            **base,
            "alert_type": widget.get("alertType") or "info",
            "alert_title": widget.get("title") or "",
            "alert_description": widget.get("text") or "Alert message.",
        })

    if widget_type == "call-to-action":
        return _widget("call-to-action", {
            **base,
            "title": widget.get("title") or "Ready to Get Started?",
            "description": widget.get("description") or "Join us today.",
            "button": {"text": widget.get("buttonText") or "Get Started", "url": widget.get("buttonLink") or "#"},
        })

    if widget_type in ("image-gallery", "gallery"):
        return _widget("image-gallery", {**base, "gallery": widget.get("images") or []})

    if widget_type in ("image-carousel", "carousel"):
        return _widget("image-carousel", {**base, "slides": widget.get("slides") or widget.get("images") or []})

    if widget_type == "icon-list":
        return _widget("icon-list", {**base, "icon_list": widget.get("items") or []})

    if widget_type == "html":
        return _widget("html", {**base, "html": widget.get("html") or ""})

    if widget_type == "audio":
        return _widget("audio", {**base, "audio_url": widget.get("url") or ""})

    if widget_type == "form":
        return _widget("form", {
            **base,
            "form_fields": widget.get("fields") or [],
            "button_text": widget.get("buttonText") or "Submit",
        })

    if widget_type == "price-table":
        return _widget("price-table", {
            **base,
            "heading": widget.get("title") or "Basic Plan",
            "price": str(widget.get("price") or "29"),
            "currency_symbol": widget.get("currency") or "$",
            "period": widget.get("period") or "mo",
            "features_list": widget.get("features") or [],
            "button_text": widget.get("buttonText") or "Get Started",
            "featured": "yes" if widget.get("featured") else "no",
        })

    if widget_type == "flip-box":
        return _widget("flip-box", {
            **base,
            "front_title": widget.get("frontTitle") or "Front Title",
            "front_description": widget.get("frontDescription") or "",
            "back_title": widget.get("backTitle") or "Back Title",
            "back_description": widget.get("backDescription") or "",
            "button_text": widget.get("buttonText") or "",
        })

    if widget_type == "countdown":
        return _widget("countdown", {**base, "due_date": widget.get("dueDate") or ""})

    if widget_type == "animated-headline":
        return _widget("animated-headline", {
            **base,
            "before_text": widget.get("beforeText") or "",
            "rotating_text": widget.get("animatedText") or [],
            "after_text": widget.get("afterText") or "",
        })

    # Header widgets
    if widget_type == "site-logo":
        return _widget("theme-site-logo", {
            **base,
            "image": {"url": widget.get("imageUrl") or ""},
            "width": {"size": widget.get("width") or 180, "unit": "px"},
        })

    if widget_type == "nav-menu":
        return _widget("nav-menu", {
            **base,
            "layout": widget.get("style") or "horizontal",
            "align_items": widget.get("alignment") or "right",
            "menu_items": widget.get("items") or [],
        })

    if widget_type == "search":
        return _widget("search-form", {
            **base,
            "skin": "full_screen" if widget.get("style") == "icon" else "classic",
            "placeholder": widget.get("placeholder") or "Search...",
        })

    if widget_type == "cart-icon":
        return _widget("woocommerce-menu-cart", {**base, "items_indicator": "bubble"})

    return _widget(widget_type, base)


def _section_settings(section: dict) -> dict:
    spacing = section.get("spacing") or {}
    settings = {
        "content_width": "full" if section.get("layout") == "full" else "boxed",
        "flex_direction": "column",
        "padding": {
            "top": spacing.get("top") or 60,
            "right": 40,
            "bottom": spacing.get("bottom") or 60,
            "left": 40,
            "unit": "px",
        },
    }

    background = section.get("background")
    if isinstance(background, dict):
        if background.get("type") == "gradient":
            settings["background_background"] = "gradient"
            if background.get("gradient"):
                settings["background_gradient"] = background["gradient"]
        elif background.get("color"):
            settings["background_background"] = "classic"
            settings["background_color"] = background["color"]
    elif isinstance(background, str) and background:
        settings["background_background"] = "gradient" if "gradient" in background else "classic"
        settings["background_color"] = background
    return settings


def _container(settings: dict, elements: list) -> dict:
    return {
        "id": generate_elementor_id(),
        "elType": "container",
        "isInner": False,
        "settings": settings,
        "elements": elements,
    }


def _global_container(block: dict) -> dict:
    """Full-width container for a global header or footer."""
    settings = {"content_width": "full"}
    if block.get("backgroundColor"):
        settings["background_background"] = "classic"
        settings["background_color"] = block["backgroundColor"]
    if block.get("height"):
        settings["min_height"] = {"size": block["height"], "unit": "px"}
    if block.get("sticky"):
        settings["sticky"] = "top"

    elements = [el for el in (convert_widget(w) for w in block.get("widgets") or []) if el]
    return _container(settings, elements)


def export_to_elementor(design: dict) -> dict:
    """
    Build the Elementor document:
    {title, type: "page", version: "0.4", page_settings, content}.
    The global header comes first and the global footer last.
    """
    structure = design.get("widget_structure") or design.get("widgetStructure") or {}
    content = []

    if structure.get("globalHeader"):
        content.append(_global_container(structure["globalHeader"]))

    for section in structure.get("sections") or []:
        if not isinstance(section, dict):
            continue
        elements = [el for el in (convert_widget(w) for w in section.get("widgets") or []) if el]
        content.append(_container(_section_settings(section), elements))

    if structure.get("globalFooter"):
        content.append(_global_container(structure["globalFooter"]))

    return {
        "title": design.get("name") or "Design",
        "type": "page",
        "version": "0.4",
        "page_settings": {"template": "elementor_canvas"},
        "content": content,
    }


def export_filename(design: dict, project: dict) -> str:
    """e.g. Bold-Elementor-example.com-about.json"""
    name = re.sub(r"\s+", "-", design.get("name") or "Design")
    site = re.sub(r"https?://", "", (project or {}).get("url") or "site").replace("/", "-")
    return f"{name}-Elementor-{site}.json"


def to_json(document: dict) -> str:
    return json.dumps(document, indent=2)
