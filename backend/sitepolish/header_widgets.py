"""
Global header markup: utility bar, announcement bar, header icon boxes,
and the header shell that lays out logo / navigation / actions.
"""

import random
import re

from sitepolish.colors import get_header_text_color
from sitepolish.elementor_html import (
    MediaPicker,
    _attr,
    _text,
    generate_elementor_id,
    generate_widget_html,
)


HEADER_ICONS = {
    "phone": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<path d="M22 16.92v3a2 2 0 0 1-2.18 2 19.79 19.79 0 0 1-8.63-3.07 19.5 19.5 0 0 1-6-6 19.79 19.79 0 0 1-3.07-8.67'
        'A2 2 0 0 1 4.11 2h3a2 2 0 0 1 2 1.72 12.84 12.84 0 0 0 .7 2.81 2 2 0 0 1-.45 2.11L8.09 9.91a16 16 0 0 0 6 6'
        'l1.27-1.27a2 2 0 0 1 2.11-.45 12.84 12.84 0 0 0 2.81.7A2 2 0 0 1 22 16.92z"></path></svg>'
    ),
    "email": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<path d="M4 4h16c1.1 0 2 .9 2 2v12c0 1.1-.9 2-2 2H4c-1.1 0-2-.9-2-2V6c0-1.1.9-2 2-2z"></path>'
        '<polyline points="22,6 12,13 2,6"></polyline></svg>'
    ),
    "location": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<path d="M21 10c0 7-9 13-9 13s-9-6-9-13a9 9 0 0 1 18 0z"></path><circle cx="12" cy="10" r="3"></circle></svg>'
    ),
    "chat": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">'
        '<path d="M21 15a2 2 0 0 1-2 2H7l-4 4V5a2 2 0 0 1 2-2h14a2 2 0 0 1 2 2z"></path></svg>'
    ),
}


def header_icon_box(widget: dict) -> str:
    """Icon + text contact item (phone, email, location, chat)."""
    element_id = widget.get("id") or generate_elementor_id()
    icon_type = widget.get("icon") or "phone"
    text = str(widget.get("text") or "")
    description = widget.get("description") or ""
    link = widget.get("link") or "#"

    icon_html = HEADER_ICONS.get(icon_type, HEADER_ICONS["phone"])

    href = link
    if link == "#":
        if icon_type == "phone":
            href = "tel:" + re.sub(r"[^0-9+]", "", text)
        elif icon_type == "email":
            href = f"mailto:{text}"

    label_html = (
        f'<div class="header-icon-box-label" style="font-size: 12px; opacity: 0.7; font-weight: 500;">{_text(description)}</div>'
        if description else ""
    )
    text_size = "16px" if description else "15px"
    return (
        '<div class="elementor-element elementor-widget elementor-widget-icon-box header-icon-box-widget" '
        f'data-id="{_attr(element_id)}" data-element_type="widget">\n'
        '  <div class="elementor-widget-container">\n'
        f'    <a href="{_attr(href)}" class="header-icon-box-link" style="display: flex; align-items: center; gap: 10px; '
        'text-decoration: none; color: inherit;">\n'
        f'      <div class="header-icon-box-icon" style="flex-shrink: 0; width: 20px; height: 20px;">{icon_html}</div>\n'
        '      <div class="header-icon-box-content" style="line-height: 1.3;">\n'
        f'        {label_html}\n'
        f'        <div class="header-icon-box-text" style="font-size: {text_size}; font-weight: 600;">{_text(text)}</div>\n'
        '      </div>\n'
        '    </a>\n'
        '  </div>\n'
        '</div>'
    )


def _utility_item(item: dict, text_color: str) -> str:
    item_type = item.get("type")
    if item_type == "text":
        return f'<span class="utility-bar-text" style="font-size: 14px; color: {_attr(text_color)};">{_text(item.get("text", ""))}</span>'
    if item_type == "link":
        return (
            f'<a href="{_attr(item.get("link") or "#")}" class="utility-bar-link" '
            f'style="font-size: 14px; color: {_attr(text_color)}; text-decoration: none;">{_text(item.get("text", ""))}</a>'
        )
    if item_type == "social-icons":
        links = "".join(
            f'<a href="{_attr(icon.get("url") or "#")}" target="_blank" rel="noopener" style="color: {_attr(text_color)};">'
            f'<i class="fab fa-{_attr(icon.get("platform", ""))}"></i></a>'
            for icon in item.get("icons") or []
        )
        return f'<div class="utility-bar-social" style="display: flex; gap: 12px;">{links}</div>'
    if item_type == "icon-box":
        return header_icon_box(item)
    return ""


def utility_bar(config: dict) -> str:
    """Thin top row with contact details, hours and social links."""
    element_id = generate_elementor_id()
    background = config.get("backgroundColor") or "#f8f9fa"
    text_color = config.get("textColor") or "#6c757d"
    left = "".join(_utility_item(i, text_color) for i in config.get("leftItems") or [])
    right = "".join(_utility_item(i, text_color) for i in config.get("rightItems") or [])
    return (
        f'<div class="elementor-utility-bar" data-id="{element_id}" style="background-color: {_attr(background)}; '
        f'color: {_attr(text_color)}; padding: 6px 40px; font-size: 14px;">\n'
        '  <div class="utility-bar-container" style="max-width: 1200px; margin: 0 auto; display: flex; '
        'justify-content: space-between; align-items: center;">\n'
        f'    <div class="utility-bar-left" style="display: flex; align-items: center; gap: 24px;">{left}</div>\n'
        f'    <div class="utility-bar-right" style="display: flex; align-items: center; gap: 24px;">{right}</div>\n'
        '  </div>\n'
        '</div>'
    )


def announcement_bar(config: dict) -> str:
    """Promotional banner above the header, closeable unless closeable is False."""
    element_id = generate_elementor_id()
    text = config.get("text") or "Special Offer! Get 20% off today!"
    background = config.get("backgroundColor") or "#007bff"
    text_color = config.get("textColor") or "#ffffff"
    link = config.get("link") or ""
    closeable = config.get("closeable") is not False

    if link:
        content = f'<a href="{_attr(link)}" style="color: {_attr(text_color)}; text-decoration: none; font-weight: 500;">{_text(text)}</a>'
    else:
        content = f'<span style="font-weight: 500;">{_text(text)}</span>'

    close_button = ""
    if closeable:
        close_button = (
            '\n  <button class="announcement-bar-close" style="position: absolute; right: 16px; top: 50%; '
            'transform: translateY(-50%); background: transparent; border: none; '
            f'color: {_attr(text_color)}; cursor: pointer; font-size: 20px; line-height: 1; opacity: 0.8;" '
            'aria-label="Close" onclick="this.parentElement.style.display=\'none\'">×</button>'
        )
    return (
        f'<div class="elementor-announcement-bar" data-id="{element_id}" style="background-color: {_attr(background)}; '
        f'color: {_attr(text_color)}; padding: 12px 40px; text-align: center; position: relative; font-size: 15px;">\n'
        f'  {content}{close_button}\n'
        '</div>'
    )


def generate_professional_header(config: dict, colors: dict | None = None,
                                 media: MediaPicker | None = None) -> str:
    """
    Header shell: optional announcement bar, optional utility row, then the
    main row with the logo on the left, navigation, and action widgets
    (buttons, search, cart, icon boxes) on the right.
    """
    media = media or MediaPicker()
    header_id = config.get("id") or random.randint(0, 9999)
    element_id = f"element-{generate_elementor_id()}"

    utility = config.get("utilityBar") or {}
    has_utility_bar = bool(utility.get("leftItems") or utility.get("rightItems"))
    announcement = config.get("announcementBar") or {}
    has_announcement = bool(announcement.get("text"))

    palette = (colors or {}).get("colors") or []
    main_bg = config.get("backgroundColor") or (palette[0] if palette else "#ffffff")
    sticky = config.get("sticky") is not False
    height = config.get("height") or 80

    widgets = config.get("widgets") or []
    logo = next((w for w in widgets if w.get("type") == "site-logo"), None)
    nav = next((w for w in widgets if w.get("type") == "nav-menu"), None)
    right = [w for w in widgets if w.get("type") not in ("site-logo", "nav-menu")]

    logo_html = generate_widget_html(logo, media) if logo else ""
    nav_html = generate_widget_html(nav, media) if nav else ""
    right_html = "\n".join(
        generate_widget_html({**w, "isHeader": True} if w.get("type") == "icon-box" else w, media)
        for w in right
    )

    row_class = "header-two-row" if has_utility_bar else "header-single-row"
    sticky_class = " the7-e-sticky-row-yes" if sticky else ""
    announcement_html = announcement_bar(announcement) if has_announcement else ""
    utility_html = utility_bar(utility) if has_utility_bar else ""
    text_color = get_header_text_color(main_bg)

    return (
        f'{announcement_html}\n'
        f'<header data-elementor-type="header" data-elementor-id="{_attr(header_id)}" '
        f'class="elementor elementor-{_attr(header_id)} elementor-location-header {row_class}" '
        'data-elementor-post-type="elementor_library">\n'
        f'  {utility_html}\n'
        f'  <div class="elementor-element {element_id}{sticky_class} e-flex e-con-boxed e-con e-parent" '
        f'data-id="{element_id}" data-element_type="container" '
        f'style="background-color: {_attr(main_bg)}; color: {text_color};">\n'
        f'    <div class="e-con-inner" style="min-height: {_attr(height)}px; display: flex; align-items: center; '
        'justify-content: space-between; padding: 0 40px;">\n'
        f'      {logo_html}\n'
        f'      <div class="elementor-element elementor-element-nav-{generate_elementor_id()} e-con-full e-flex e-con e-child" '
        'data-element_type="container">\n'
        f'        {nav_html}\n'
        '      </div>\n'
        f'      <div class="elementor-element elementor-element-actions-{generate_elementor_id()} e-con-full e-flex e-con e-child" '
        'data-element_type="container" style="display: flex; align-items: center; gap: 24px;">\n'
        f'        {right_html}\n'
        '      </div>\n'
        '    </div>\n'
        '  </div>\n'
        '</header>'
    )


def generate_global_header_html(global_header: dict | None, company_name: str = "",
                                colors: dict | None = None, media: MediaPicker | None = None) -> str:
    """
    Render a variation's globalHeader. A logo widget without an image falls
    back to the company name as a text logo.
    """
    if not global_header:
        return ""

    widgets = []
    for widget in global_header.get("widgets") or []:
        if widget.get("type") == "site-logo" and not widget.get("imageUrl") and not widget.get("textLogo"):
            widget = {**widget, "textLogo": company_name or "LOGO"}
        widgets.append(widget)

    return generate_professional_header({**global_header, "widgets": widgets}, colors, media)
