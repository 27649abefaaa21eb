"""
Widget structure -> Elementor-flavoured HTML.

Every widget renders inside the standard Elementor wrapper
(elementor-element / elementor-widget-<type> / elementor-widget-container)
with data-id, data-element_type, data-widget_type and data-settings attributes,
so previews look and nest the way the exported page will.

A widget is a dict with a "type" and its content either at the top level
(the shape Claude produces) or under "settings" (the Elementor control names).
"""

import json
import random
import re
import string
from html import escape
from urllib.parse import quote

PLACEHOLDER_IMAGE = "https://via.placeholder.com/800x600?text=Image"
PLACEHOLDER_IMAGE_BOX = "https://via.placeholder.com/400x300?text=Image+Box"
PLACEHOLDER_HERO = "https://via.placeholder.com/1920x800?text=Hero+Banner"

_ID_ALPHABET = string.ascii_lowercase + string.digits

SEARCH_ICON_SVG = (
    '<svg width="20" height="20" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
    '<circle cx="11" cy="11" r="8"></circle><line x1="21" y1="21" x2="16.65" y2="16.65"></line></svg>'
)
CART_ICON_SVG = (
    '<svg width="22" height="22" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
    '<circle cx="9" cy="21" r="1"></circle><circle cx="20" cy="21" r="1"></circle>'
    '<path d="M1 1h4l2.68 13.39a2 2 0 0 0 2 1.61h9.72a2 2 0 0 0 2-1.61L23 6H6"></path></svg>'
)


def generate_elementor_id() -> str:
    """Random 7-character lowercase alphanumeric id, like Elementor's own."""
    return "".join(random.choices(_ID_ALPHABET, k=7))


def _attr(value) -> str:
    return escape(str(value), quote=True)


def _text(value) -> str:
    return escape(str(value), quote=False)


def _setting(widget: dict, key: str, *path, default=None):
    """widget[key], else widget["settings"][path...], else default."""
    value = widget.get(key)
    if value not in (None, ""):
        return value
    node = widget.get("settings") or {}
    for part in path:
        if not isinstance(node, dict):
            node = None
            break
        node = node.get(part)
    if node not in (None, ""):
        return node
    return default


def _style_attr(styles: dict) -> str:
    rules = "; ".join(f"{k}: {v}" for k, v in styles.items() if v not in (None, ""))
    return f' style="{_attr(rules)}"' if rules else ""


def _css_size(value, unit: str = "px") -> str | None:
    if value in (None, ""):
        return None
    if isinstance(value, (int, float)):
        return f"{value}{unit}"
    return str(value)


def data_attributes(element_id: str, el_type: str, widget_type: str | None = None,
                    settings: dict | None = None) -> str:
    attrs = [f'data-id="{_attr(element_id)}"', f'data-element_type="{el_type}"']
    if widget_type:
        attrs.append(f'data-widget_type="{widget_type}.default"')
    if settings:
        settings_json = json.dumps(settings).replace('"', "&quot;")
        attrs.append(f'data-settings="{settings_json}"')
    return " ".join(attrs)


def widget_wrapper(widget_type: str, element_id: str, settings: dict | None, inner_html: str,
                   extra_classes: str = "") -> str:
    classes = f"elementor-element elementor-widget elementor-widget-{widget_type}"
    if extra_classes:
        classes += f" {extra_classes}"
    return (
        f'<div class="{classes}" {data_attributes(element_id, "widget", widget_type, settings)}>\n'
        f'  <div class="elementor-widget-container">\n'
        f'    {inner_html}\n'
        f'  </div>\n'
        f'</div>'
    )


def generate_container_html(children_html: str, settings: dict | None = None, content_width: str | None = None,
                            element_id: str | None = None, styles: dict | None = None) -> str:
    """Flexbox container (e-con). Boxed unless the content width is "full"."""
    settings = dict(settings or {})
    if content_width:
        settings["content_width"] = content_width
    element_id = element_id or generate_elementor_id()
    width_class = "e-con-full" if settings.get("content_width") == "full" else "e-con-boxed"
    return (
        f'<div class="elementor-element e-flex {width_class} e-con e-parent" '
        f'{data_attributes(element_id, "container", settings=settings)}{_style_attr(styles or {})}>\n'
        f'  <div class="e-con-inner">\n'
        f'    {children_html}\n'
        f'  </div>\n'
        f'</div>'
    )


class MediaPicker:
    """Hands out project media of a given type in round-robin order."""

    def __init__(self, media: list | None = None):
        self._by_type = {"image": [], "video": []}
        for item in media or []:
            if isinstance(item, dict) and item.get("type") in self._by_type and item.get("url"):
                self._by_type[item["type"]].append(item)
        self._cursor = {"image": 0, "video": 0}

    def next(self, media_type: str) -> dict | None:
        items = self._by_type.get(media_type) or []
        if not items:
            return None
        item = items[self._cursor[media_type] % len(items)]
        self._cursor[media_type] += 1
        return item

    def next_url(self, media_type: str) -> str | None:
        item = self.next(media_type)
        return item["url"] if item else None


# ---------------------------------------------------------------------------
# Basic widgets
# ---------------------------------------------------------------------------

def heading_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    level = _setting(widget, "level", "header_size", default="h2")
    if level not in ("h1", "h2", "h3", "h4", "h5", "h6", "div", "span", "p"):
        level = "h2"
    text = _setting(widget, "text", "title", default="Heading")
    styles = {
        "font-size": _css_size(widget.get("fontSize")),
        "font-family": widget.get("fontFamily"),
        "color": widget.get("color"),
        "text-align": widget.get("align"),
    }
    inner = f'<{level} class="elementor-heading-title elementor-size-default"{_style_attr(styles)}>{_text(text)}</{level}>'
    return widget_wrapper("heading", element_id, widget.get("settings"), inner)


def text_editor_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    # Rich text: the editor content is HTML
    text = _setting(widget, "text", "editor", default="Content text goes here.")
    styles = {"font-size": _css_size(widget.get("fontSize")), "color": widget.get("color")}
    inner = f'<div class="elementor-text-editor elementor-clearfix"{_style_attr(styles)}>{text}</div>'
    return widget_wrapper("text-editor", element_id, widget.get("settings"), inner)


def image_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    url = _setting(widget, "url", "image", "url") or media.next_url("image") or PLACEHOLDER_IMAGE
    alt = _setting(widget, "alt", "caption", default="Image")
    inner = (
        f'<img decoding="async" width="800" height="600" src="{_attr(url)}" '
        f'class="attachment-large size-large wp-image-{element_id}" alt="{_attr(alt)}" loading="lazy" />'
    )
    return widget_wrapper("image", element_id, widget.get("settings"), inner)


def _youtube_id(url: str) -> str:
    match = re.search(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&]+)", url or "")
    return match.group(1) if match else ""


def video_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    settings = widget.get("settings") or {}
    video_type = settings.get("video_type") or ("youtube" if _youtube_id(widget.get("url", "")) else "hosted")
    youtube_url = settings.get("youtube_url") or (widget.get("url") if video_type == "youtube" else None)
    video_url = (
        widget.get("url")
        or (settings.get("hosted_url") or {}).get("url")
        or youtube_url
        or media.next_url("video")
        or ""
    )

    inner = ""
    if video_type == "youtube" and youtube_url:
        inner = (
            '<div class="elementor-wrapper elementor-open-inline">\n'
            f'  <iframe class="elementor-video-iframe" allowfullscreen="" title="youtube Video Player" '
            f'src="https://www.youtube.com/embed/{_attr(_youtube_id(youtube_url))}?feature=oembed&amp;controls=1&amp;rel=0"></iframe>\n'
            '</div>'
        )
    elif video_url:
        inner = (
            '<div class="elementor-wrapper elementor-open-inline">\n'
            '  <div class="elementor-video">\n'
            '    <video class="elementor-video-player" controls preload="metadata" controlslist="nodownload">\n'
            f'      <source src="{_attr(video_url)}" type="video/mp4">\n'
            '    </video>\n'
            '  </div>\n'
            '</div>'
        )
    return widget_wrapper("video", element_id, settings, inner)


def button_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    text = _setting(widget, "text", "text", default="Click Here")
    link = _setting(widget, "link", "link", "url", default="#")
    size = _setting(widget, "size", "size", default="sm")
    style = widget.get("style") or "primary"

    custom = widget.get("customStyle") or {}
    styles = {
        "background-color": custom.get("backgroundColor"),
        "color": custom.get("color"),
        "border": custom.get("border"),
        "border-radius": custom.get("borderRadius"),
        "padding": custom.get("padding"),
        "font-size": custom.get("fontSize"),
        "font-weight": custom.get("fontWeight"),
    }
    inner = (
        '<div class="elementor-button-wrapper">\n'
        f'  <a class="elementor-button elementor-button-link elementor-size-{_attr(size)} elementor-button-{_attr(style)}" '
        f'href="{_attr(link)}" role="button"{_style_attr(styles)}>\n'
        '    <span class="elementor-button-content-wrapper">\n'
        f'      <span class="elementor-button-text">{_text(text)}</span>\n'
        '    </span>\n'
        '  </a>\n'
        '</div>'
    )
    return widget_wrapper("button", element_id, widget.get("settings"), inner)


def divider_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    style = _setting(widget, "style", "style", default="solid")
    weight = _setting(widget, "width", "weight", "size", default=1)
    color = widget.get("color")
    color_rule = f" --divider-color: {_attr(color)};" if color else ""
    inner = (
        f'<div class="elementor-divider" style="--divider-border-style: {_attr(style)}; '
        f'--divider-border-width: {_attr(weight)}px;{color_rule}">\n'
        '  <span class="elementor-divider-separator"></span>\n'
        '</div>'
    )
    return widget_wrapper("divider", element_id, widget.get("settings"), inner)


def spacer_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    height = _setting(widget, "height", "space", "size", default=50)
    inner = (
        '<div class="elementor-spacer">\n'
        f'  <div class="elementor-spacer-inner" style="height: {_attr(height)}px;"></div>\n'
        '</div>'
    )
    return widget_wrapper("spacer", element_id, widget.get("settings"), inner)


def google_maps_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    address = _setting(widget, "address", "address", default="New York, NY")
    zoom = _setting(widget, "zoom", "zoom", "size", default=12)
    inner = (
        '<div class="elementor-custom-embed">\n'
        f'  <iframe loading="lazy" src="https://maps.google.com/maps?q={quote(str(address))}&amp;t=m&amp;z={_attr(zoom)}'
        f'&amp;output=embed&amp;iwloc=near" title="{_attr(address)}" aria-label="{_attr(address)}"></iframe>\n'
        '</div>'
    )
    return widget_wrapper("google_maps", element_id, widget.get("settings"), inner)


def icon_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    icon = _setting(widget, "icon", "selected_icon", "value", default="★")
    view = _setting(widget, "view", "view", default="default")
    inner = (
        '<div class="elementor-icon-wrapper">\n'
        f'  <div class="elementor-icon elementor-view-{_attr(view)}">\n'
        f'    <span class="elementor-icon-svg">{_text(icon)}</span>\n'
        '  </div>\n'
        '</div>'
    )
    return widget_wrapper("icon", element_id, widget.get("settings"), inner)


def icon_box_widget(widget: dict, media: MediaPicker) -> str:
    if widget.get("isHeader"):
        from sitepolish.header_widgets import header_icon_box
        return header_icon_box(widget)

    element_id = widget.get("id") or generate_elementor_id()
    icon = widget.get("icon") or "★"
    title = _setting(widget, "title", "title_text", default="Feature Title")
    description = _setting(widget, "description", "description_text", default="Feature description goes here.")
    inner = (
        '<div class="elementor-icon-box-wrapper">\n'
        '  <div class="elementor-icon-box-icon">\n'
        f'    <span class="elementor-icon elementor-animation-">{_text(icon)}</span>\n'
        '  </div>\n'
        '  <div class="elementor-icon-box-content">\n'
        f'    <h3 class="elementor-icon-box-title"><span>{_text(title)}</span></h3>\n'
        f'    <p class="elementor-icon-box-description">{_text(description)}</p>\n'
        '  </div>\n'
        '</div>'
    )
    return widget_wrapper("icon-box", element_id, widget.get("settings"), inner)


def image_box_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    url = _setting(widget, "url", "image", "url") or media.next_url("image") or PLACEHOLDER_IMAGE_BOX
    title = _setting(widget, "title", "title_text", default="Image Box Title")
    description = _setting(widget, "description", "description_text", default="Description text.")
    inner = (
        '<div class="elementor-image-box-wrapper">\n'
        '  <figure class="elementor-image-box-img">\n'
        f'    <img decoding="async" src="{_attr(url)}" class="attachment-full size-full wp-image-{element_id}" '
        f'alt="{_attr(widget.get("alt") or title)}" loading="lazy" />\n'
        '  </figure>\n'
        '  <div class="elementor-image-box-content">\n'
        f'    <h3 class="elementor-image-box-title">{_text(title)}</h3>\n'
        f'    <p class="elementor-image-box-description">{_text(description)}</p>\n'
        '  </div>\n'
        '</div>'
    )
    return widget_wrapper("image-box", element_id, widget.get("settings"), inner)


def testimonial_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    text = _setting(widget, "text", "testimonial_content", default="This is a great testimonial.")
    name = _setting(widget, "name", "testimonial_name", default="John Doe")
    position = _setting(widget, "position", "testimonial_job", default="Customer")
    photo = widget.get("imageUrl") or (media.next_url("image") if widget.get("showPhoto") else None)
    photo_html = (
        f'<div class="elementor-testimonial-image"><img src="{_attr(photo)}" alt="{_attr(name)}" loading="lazy" /></div>\n'
        if photo else ""
    )
    inner = (
        '<div class="elementor-testimonial-wrapper">\n'
        f'  <div class="elementor-testimonial-content">{_text(text)}</div>\n'
        '  <div class="elementor-testimonial-meta">\n'
        '    <div class="elementor-testimonial-meta-inner">\n'
        f'      {photo_html}'
        '      <div class="elementor-testimonial-details">\n'
        f'        <div class="elementor-testimonial-name">{_text(name)}</div>\n'
        f'        <div class="elementor-testimonial-job">{_text(position)}</div>\n'
        '      </div>\n'
        '    </div>\n'
        '  </div>\n'
        '</div>'
    )
    return widget_wrapper("testimonial", element_id, widget.get("settings"), inner)


def star_rating_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    try:
        rating = float(_setting(widget, "rating", "rating", "size", default=5))
    except (TypeError, ValueError):
        rating = 5
    stars = "\n  ".join(
        f'<i class="{"fas fa-star" if i < rating else "far fa-star"}" aria-hidden="true"></i>'
        for i in range(5)
    )
    inner = f'<div class="elementor-star-rating" title="{rating:g}/5">\n  {stars}\n</div>'
    return widget_wrapper("star-rating", element_id, widget.get("settings"), inner)


DEFAULT_SOCIAL_ICONS = [
    {"social": "facebook", "link": {"url": "#"}},
    {"social": "twitter", "link": {"url": "#"}},
    {"social": "instagram", "link": {"url": "#"}},
]


def social_icons_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    icons = _setting(widget, "icons", "social_icon_list", default=DEFAULT_SOCIAL_ICONS)
    items = []
    for icon in icons:
        network = (icon.get("social") or icon.get("platform") or "link").lower()
        url = icon.get("url") or (icon.get("link") or {}).get("url") or "#"
        items.append(
            '<span class="elementor-grid-item">'
            f'<a class="elementor-icon elementor-social-icon elementor-social-icon-{_attr(network)}" '
            f'href="{_attr(url)}" target="_blank" rel="noopener">'
            f'<span class="elementor-screen-only">{_text(network.title())}</span>'
            f'<i class="fab fa-{_attr(network)}"></i></a></span>'
        )
    inner = '<div class="elementor-social-icons-wrapper elementor-grid">\n  ' + "\n  ".join(items) + "\n</div>"
    return widget_wrapper("social-icons", element_id, widget.get("settings"), inner)


def counter_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    end_number = _setting(widget, "endNumber", "ending_number", default=100)
    title = _setting(widget, "title", "title", default="Counter Title")
    inner = (
        '<div class="elementor-counter">\n'
        '  <div class="elementor-counter-number-wrapper">\n'
        f'    <span class="elementor-counter-number" data-duration="2000" data-to-value="{_attr(end_number)}">'
        f'{_text(end_number)}</span>\n'
        '  </div>\n'
        f'  <div class="elementor-counter-title">{_text(title)}</div>\n'
        '</div>'
    )
    return widget_wrapper("counter", element_id, widget.get("settings"), inner)


def progress_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    title = _setting(widget, "title", "title", default="Skill")
    percent = _setting(widget, "percent", "percent", "size", default=80)
    inner = (
        f'<div class="elementor-progress-wrapper" role="progressbar" aria-valuenow="{_attr(percent)}" '
        'aria-valuemin="0" aria-valuemax="100">\n'
        f'  <div class="elementor-progress-bar" data-max="{_attr(percent)}">\n'
        f'    <span class="elementor-progress-text">{_text(title)}</span>\n'
        f'    <span class="elementor-progress-percentage">{_text(percent)}%</span>\n'
        f'    <div class="elementor-progress-bar-fill" style="width: {_attr(percent)}%;"></div>\n'
        '  </div>\n'
        '</div>'
    )
    return widget_wrapper("progress", element_id, widget.get("settings"), inner)


def accordion_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    items = _setting(widget, "items", "tabs", default=[
        {"title": "Item 1", "content": "Content 1"},
        {"title": "Item 2", "content": "Content 2"},
    ])
    parts = []
    for i, item in enumerate(items):
        active = " elementor-active" if i == 0 else ""
        tab = i + 1
        parts.append(
            '<div class="elementor-accordion-item">\n'
            f'  <div class="elementor-tab-title{active}" data-tab="{tab}" role="tab" '
            f'aria-controls="elementor-tab-content-{element_id}{tab}">\n'
            '    <span class="elementor-accordion-icon" aria-hidden="true">'
            '<i class="fas fa-plus"></i></span>\n'
            f'    <a class="elementor-accordion-title" tabindex="0">{_text(item.get("title", ""))}</a>\n'
            '  </div>\n'
            f'  <div id="elementor-tab-content-{element_id}{tab}" class="elementor-tab-content elementor-clearfix{active}" '
            f'data-tab="{tab}" role="tabpanel"><p>{_text(item.get("content", ""))}</p></div>\n'
            '</div>'
        )
    inner = '<div class="elementor-accordion" role="tablist">\n' + "\n".join(parts) + "\n</div>"
    return widget_wrapper("accordion", element_id, widget.get("settings"), inner)


def tabs_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    tabs = _setting(widget, "tabs", "tabs", default=[
        {"title": "Tab 1", "content": "Tab content 1"},
        {"title": "Tab 2", "content": "Tab content 2"},
    ])
    titles = []
    contents = []
    for i, tab in enumerate(tabs):
        active = " elementor-active" if i == 0 else ""
        titles.append(
            f'<div class="elementor-tab-title{active}" data-tab="{i + 1}" role="tab" '
            f'tabindex="{0 if i == 0 else -1}"><a href="#">{_text(tab.get("title", ""))}</a></div>'
        )
        contents.append(
            f'<div class="elementor-tab-content elementor-clearfix{active}" data-tab="{i + 1}" role="tabpanel">'
            f'<p>{_text(tab.get("content", ""))}</p></div>'
        )
    inner = (
        '<div class="elementor-tabs" role="tablist">\n'
        '  <div class="elementor-tabs-wrapper" role="tablist">\n    ' + "\n    ".join(titles) + '\n  </div>\n'
        '  <div class="elementor-tabs-content-wrapper">\n    ' + "\n    ".join(contents) + '\n  </div>\n'
        '</div>'
    )
    return widget_wrapper("tabs", element_id, widget.get("settings"), inner)


def alert_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    alert_type = _setting(widget, "alertType", "alert_type", default="info")
    title = widget.get("title")
    text = _setting(widget, "text", "alert_description", default="This is an alert message.")
    title_html = f'<span class="elementor-alert-title">{_text(title)}</span>\n  ' if title else ""
    inner = (
        f'<div class="elementor-alert elementor-alert-{_attr(alert_type)}" role="alert">\n'
        f'  {title_html}<span class="elementor-alert-description">{_text(text)}</span>\n'
        '</div>'
    )
    return widget_wrapper("alert", element_id, widget.get("settings"), inner)


def call_to_action_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    title = _setting(widget, "title", "title", default="Ready to Get Started?")
    description = _setting(widget, "description", "description", default="Join thousands of satisfied customers today.")
    button_text = _setting(widget, "buttonText", "button", "text", default="Get Started Now")
    button_link = _setting(widget, "buttonLink", "button", "url", default="#")

    background = ""
    if widget.get("backgroundType") == "image" or widget.get("backgroundImage"):
        bg_url = widget.get("backgroundImage") if isinstance(widget.get("backgroundImage"), str) else None
        bg_url = bg_url or media.next_url("image")
        if bg_url:
            background = f'<div class="elementor-cta__bg" style="background-image: url({_attr(bg_url)});"></div>\n  '

    inner = (
        '<div class="elementor-cta">\n'
        f'  {background}<div class="elementor-cta__content">\n'
        f'    <h2 class="elementor-cta__title">{_text(title)}</h2>\n'
        f'    <div class="elementor-cta__description">{_text(description)}</div>\n'
        '    <div class="elementor-cta__button-wrapper">\n'
        f'      <a class="elementor-cta__button elementor-button elementor-size-sm" href="{_attr(button_link)}">'
        f'{_text(button_text)}</a>\n'
        '    </div>\n'
        '  </div>\n'
        '</div>'
    )
    return widget_wrapper("call-to-action", element_id, widget.get("settings"), inner)


def hero_banner_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    bg_url = widget.get("backgroundImage") if isinstance(widget.get("backgroundImage"), str) else None
    bg_url = bg_url or media.next_url("image") or PLACEHOLDER_HERO
    title = widget.get("title") or "Welcome to Our Website"
    subtitle = widget.get("subtitle") or "Discover amazing products and services"
    button_text = widget.get("buttonText") or "Get Started"
    button_link = widget.get("buttonLink") or "#"
    inner = (
        f'<div class="elementor-hero-banner" style="background-image: url({_attr(bg_url)});">\n'
        '  <div class="elementor-hero-banner__overlay"></div>\n'
        '  <div class="elementor-hero-banner__content">\n'
        f'    <h1 class="elementor-heading-title">{_text(title)}</h1>\n'
        f'    <p class="elementor-hero-banner__subtitle">{_text(subtitle)}</p>\n'
        f'    <a class="elementor-button elementor-size-lg" href="{_attr(button_link)}">{_text(button_text)}</a>\n'
        '  </div>\n'
        '</div>'
    )
    return widget_wrapper("hero-banner", element_id, widget.get("settings"), inner)


def image_gallery_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    urls = [img.get("url") if isinstance(img, dict) else img for img in widget.get("images") or []]
    count = widget.get("imageCount") or widget.get("count") or len(urls) or 4
    while len(urls) < count:
        urls.append(media.next_url("image") or f"https://via.placeholder.com/400x300?text=Gallery+{len(urls) + 1}")
    items = "\n  ".join(
        f'<figure class="elementor-gallery-item"><img class="elementor-gallery-item-image" src="{_attr(u)}" '
        f'alt="Gallery image {i + 1}" loading="lazy" /></figure>'
        for i, u in enumerate(urls[:count])
    )
    inner = f'<div class="elementor-gallery elementor-grid">\n  {items}\n</div>'
    return widget_wrapper(widget.get("type") or "image-gallery", element_id, widget.get("settings"), inner)


def icon_list_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    items = widget.get("items") or (widget.get("settings") or {}).get("icon_list") or []
    lis = []
    for item in items:
        text = item.get("text") if isinstance(item, dict) else item
        lis.append(
            '<li class="elementor-icon-list-item"><span class="elementor-icon-list-icon">'
            f'<i class="fas fa-check"></i></span><span class="elementor-icon-list-text">{_text(text)}</span></li>'
        )
    inner = '<ul class="elementor-icon-list-items">\n  ' + "\n  ".join(lis) + "\n</ul>"
    return widget_wrapper("icon-list", element_id, widget.get("settings"), inner)


def price_table_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    features = widget.get("features") or ["Feature 1", "Feature 2", "Feature 3"]
    badge = '<div class="elementor-price-table__ribbon">Most Popular</div>\n  ' if widget.get("featured") else ""
    feature_items = "".join(
        f'<li class="elementor-price-table__feature">{_text(f)}</li>' for f in features
    )
    inner = (
        '<div class="elementor-price-table">\n'
        f'  {badge}<h3 class="elementor-price-table__heading">{_text(widget.get("title") or "Basic Plan")}</h3>\n'
        f'  <div class="elementor-price-table__price">${_text(widget.get("price") or 29)}'
        f'<span class="elementor-price-table__period">/{_text(widget.get("period") or "mo")}</span></div>\n'
        f'  <ul class="elementor-price-table__features-list">{feature_items}</ul>\n'
        f'  <a class="elementor-price-table__button elementor-button" href="{_attr(widget.get("buttonLink") or "#")}">'
        f'{_text(widget.get("buttonText") or "Choose Plan")}</a>\n'
        '</div>'
    )
    return widget_wrapper("price-table", element_id, widget.get("settings"), inner)


def form_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    fields = widget.get("fields") or ["name", "email", "message"]
    rows = []
    for field in fields:
        name = field.get("name") if isinstance(field, dict) else str(field)
        label = (field.get("label") if isinstance(field, dict) else None) or name.replace("_", " ").title()
        if name == "message":
            control = f'<textarea name="{_attr(name)}" rows="4" placeholder="{_attr(label)}"></textarea>'
        else:
            input_type = "email" if "email" in name else "tel" if "phone" in name else "text"
            control = f'<input type="{input_type}" name="{_attr(name)}" placeholder="{_attr(label)}">'
        rows.append(
            f'<div class="elementor-field-group"><label class="elementor-field-label">{_text(label)}</label>{control}</div>'
        )
    inner = (
        '<form class="elementor-form" method="post">\n  ' + "\n  ".join(rows) + "\n"
        f'  <button type="submit" class="elementor-button">{_text(widget.get("buttonText") or "Submit")}</button>\n'
        '</form>'
    )
    return widget_wrapper("form", element_id, widget.get("settings"), inner)


def animated_headline_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    before = widget.get("beforeText") or widget.get("text") or ""
    highlighted = widget.get("highlightedText") or widget.get("rotatingText") or ""
    if isinstance(highlighted, list):
        highlighted = highlighted[0] if highlighted else ""
    after = widget.get("afterText") or ""
    inner = (
        '<h2 class="elementor-headline">\n'
        f'  <span class="elementor-headline-plain-text">{_text(before)}</span>\n'
        '  <span class="elementor-headline-dynamic-wrapper">'
        f'<span class="elementor-headline-dynamic-text">{_text(highlighted)}</span></span>\n'
        f'  <span class="elementor-headline-plain-text">{_text(after)}</span>\n'
        '</h2>'
    )
    return widget_wrapper("animated-headline", element_id, widget.get("settings"), inner)


def html_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    return widget_wrapper("html", element_id, widget.get("settings"), widget.get("html") or widget.get("code") or "")


# ---------------------------------------------------------------------------
# Header widgets
# ---------------------------------------------------------------------------

def site_logo_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    image_url = widget.get("imageUrl")
    alt = widget.get("alt") or "Logo"
    width = widget.get("width")

    if image_url:
        size = f' width="{_attr(width)}"' if width else ""
        inner = (
            '<a href="/" class="elementor-site-logo-link">'
            f'<img src="{_attr(image_url)}" alt="{_attr(alt)}"{size} class="elementor-site-logo" /></a>'
        )
    else:
        text_logo = widget.get("textLogo") or alt.replace(" logo", "") or "LOGO"
        style = widget.get("textLogoStyle") or {}
        styles = {
            "color": style.get("color"),
            "font-size": style.get("fontSize"),
            "font-weight": style.get("fontWeight"),
            "text-transform": style.get("textTransform"),
            "letter-spacing": style.get("letterSpacing"),
        }
        inner = (
            '<a href="/" class="elementor-site-logo-link">'
            f'<span class="elementor-site-logo-placeholder"{_style_attr(styles)}>{_text(text_logo)}</span></a>'
        )
    return widget_wrapper("theme-site-logo", element_id, widget.get("settings"), inner)


def _flatten_menu_items(items) -> list:
    flat = []
    for item in items or []:
        if isinstance(item, list):
            flat.extend(_flatten_menu_items(item))
        else:
            flat.append(item)
    return flat


def _anchor(text: str) -> str:
    return "#" + re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def nav_menu_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    items = _flatten_menu_items(widget.get("items")) or ["Home", "About", "Services", "Contact"]
    item_style = widget.get("itemStyle") or {}
    orientation = widget.get("style") or "horizontal"
    alignment = widget.get("alignment") or "right"

    link_styles = {
        "color": item_style.get("color"),
        "font-size": item_style.get("fontSize"),
        "font-weight": item_style.get("fontWeight"),
    }
    lis = []
    for item in items:
        if isinstance(item, dict):
            text = item.get("text") or item.get("label") or ""
            link = item.get("link") or item.get("url") or _anchor(text)
        else:
            text = str(item)
            link = _anchor(text)
        lis.append(
            f'<li class="menu-item"><a href="{_attr(link)}" class="elementor-item elementor-nav-menu-link"'
            f'{_style_attr(link_styles)}>{_text(text)}</a></li>'
        )

    list_styles = {"gap": item_style.get("spacing")}
    inner = (
        f'<nav class="elementor-nav-menu--main elementor-nav-menu__container elementor-nav-menu__align-{_attr(alignment)}" '
        'aria-label="Menu">\n'
        f'  <ul class="elementor-nav-menu dt-nav-menu-{_attr(orientation)}"{_style_attr(list_styles)}>\n    '
        + "\n    ".join(lis)
        + "\n  </ul>\n</nav>"
    )
    return widget_wrapper("nav-menu", element_id, widget.get("settings"), inner)


def search_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    placeholder = widget.get("placeholder") or "Search..."
    if widget.get("style") == "input-box":
        inner = (
            '<form class="elementor-search-form" role="search" action="/" method="get">\n'
            f'  <input class="elementor-search-form__input" type="search" name="s" placeholder="{_attr(placeholder)}">\n'
            f'  <button class="elementor-search-form__submit" type="submit" aria-label="Search">{SEARCH_ICON_SVG}</button>\n'
            '</form>'
        )
    else:
        inner = f'<button class="elementor-search-icon" type="button" aria-label="Search">{SEARCH_ICON_SVG}</button>'
    return widget_wrapper("search-form", element_id, widget.get("settings"), inner)


def cart_icon_widget(widget: dict, media: MediaPicker) -> str:
    element_id = widget.get("id") or generate_elementor_id()
    count = widget.get("itemCount") or 0
    inner = (
        f'<a class="elementor-cart-icon-link" href="{_attr(widget.get("link") or "/cart")}" aria-label="Cart">'
        f'{CART_ICON_SVG}<span class="elementor-cart-count">{_text(count)}</span></a>'
    )
    return widget_wrapper("woocommerce-menu-cart", element_id, widget.get("settings"), inner)


WIDGET_RENDERERS = {
    "heading": heading_widget,
    "text-editor": text_editor_widget,
    "image": image_widget,
    "video": video_widget,
    "button": button_widget,
    "divider": divider_widget,
    "spacer": spacer_widget,
    "google_maps": google_maps_widget,
    "icon": icon_widget,
    "icon-box": icon_box_widget,
    "image-box": image_box_widget,
    "testimonial": testimonial_widget,
    "star-rating": star_rating_widget,
    "social-icons": social_icons_widget,
    "counter": counter_widget,
    "progress": progress_widget,
    "progress-bar": progress_widget,
    "accordion": accordion_widget,
    "toggle": accordion_widget,
    "tabs": tabs_widget,
    "alert": alert_widget,
    "call-to-action": call_to_action_widget,
    "hero-banner": hero_banner_widget,
    "image-gallery": image_gallery_widget,
    "image-carousel": image_gallery_widget,
    "gallery": image_gallery_widget,
    "carousel": image_gallery_widget,
    "icon-list": icon_list_widget,
    "price-table": price_table_widget,
    "form": form_widget,
    "animated-headline": animated_headline_widget,
    "html": html_widget,
    "site-logo": site_logo_widget,
    "nav-menu": nav_menu_widget,
    "search": search_widget,
    "cart-icon": cart_icon_widget,
}


def generate_widget_html(widget: dict, media: MediaPicker | None = None) -> str:
    """Render one widget. Unknown types become an HTML comment."""
    media = media or MediaPicker()
    widget_type = widget.get("type")
    renderer = WIDGET_RENDERERS.get(widget_type)
    if renderer is None:
        return f'<!-- Elementor widget type "{_text(widget_type)}" not yet implemented -->'
    return renderer(widget, media)


def generate_section_html(section: dict, index: int = 0, media: MediaPicker | None = None) -> str:
    """A section becomes one top-level container holding its widgets."""
    media = media or MediaPicker()
    children = "\n".join(
        generate_widget_html(w, media)
        for w in section.get("widgets") or []
        if isinstance(w, dict) and w.get("type") not in ("global-header", "global-footer")
    )

    spacing = section.get("spacing") or {}
    background = section.get("background")
    styles = {
        "padding": f'{spacing.get("top", 60)}px 40px {spacing.get("bottom", 60)}px',
    }
    if isinstance(background, str):
        styles["background"] = background
    elif isinstance(background, dict):
        if background.get("type") == "gradient" and background.get("gradient"):
            styles["background"] = background["gradient"]
        elif background.get("color"):
            styles["background-color"] = background["color"]

    layout = section.get("layout")
    settings = {"content_width": "full" if layout == "full" else "boxed"}
    container = generate_container_html(children, settings, element_id=section.get("id"), styles=styles)
    css_id = section.get("cssId") or section.get("name") or f"section-{index + 1}"
    if css_id:
        anchor = re.sub(r"[^a-z0-9]+", "-", str(css_id).lower()).strip("-")
        return f'<section id="{_attr(anchor)}" class="elementor-section-wrap">\n{container}\n</section>'
    return container
