"""Image helpers: screenshot compression for Claude, stock-image processing, logo palettes."""
from PIL import Image, ImageOps, features
import io
import base64

import httpx


VIEWPORT_CROPS = {
    "desktop": (1920, 1080),
    "laptop": (1366, 768),
    "tablet": (1024, 768),
    "mobile": (767, 600),
}

MAX_IMAGE_WIDTH = 1920
MAX_IMAGE_BYTES = 100 * 1024

# AVIF needs a Pillow build with libavif; WEBP is the fallback output format
OUTPUT_FORMAT = "AVIF" if features.check("avif") else "WEBP"


def _to_rgb(img: Image.Image) -> Image.Image:
    if img.mode == 'RGBA':
        bg = Image.new('RGB', img.size, (255, 255, 255))
        bg.paste(img, mask=img.split()[3])
        return bg
    if img.mode != 'RGB':
        return img.convert('RGB')
    return img


def optimize_screenshot(screenshot_bytes: bytes, max_width: int = 1280, quality: int = 75) -> bytes:
    """
    Resize and compress a screenshot for API consumption.
    1920x1080 PNG (~2-4MB) becomes a 1280x720 JPEG (~150-300KB).
    """
    img = Image.open(io.BytesIO(screenshot_bytes))

    w, h = img.size
    if w > max_width:
        ratio = max_width / w
        img = img.resize((max_width, int(h * ratio)), Image.LANCZOS)

    img = _to_rgb(img)

    buf = io.BytesIO()
    img.save(buf, format='JPEG', quality=quality, optimize=True)
    return buf.getvalue()


def screenshot_to_b64(screenshot_bytes: bytes, compress: bool = True,
                      max_width: int = 1280, quality: int = 75) -> tuple[str, str]:
    """
    Convert screenshot bytes to base64 string.
    Returns (base64_string, media_type).
    """
    if compress:
        optimized = optimize_screenshot(screenshot_bytes, max_width=max_width, quality=quality)
        return base64.b64encode(optimized).decode(), "image/jpeg"
    else:
        return base64.b64encode(screenshot_bytes).decode(), "image/png"


async def download_image(url: str, timeout: float = 10.0) -> bytes:
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.content


def _encode(img: Image.Image, quality: int) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=OUTPUT_FORMAT, quality=quality)
    return buf.getvalue()


def process_image(image_bytes: bytes) -> bytes:
    """
    Shrink an image to at most 1920px wide and encode it for the web.
    Quality 80, retried at 60 if the result is still over 100KB.
    """
    img = _to_rgb(Image.open(io.BytesIO(image_bytes)))

    w, h = img.size
    if w > MAX_IMAGE_WIDTH:
        img = img.resize((MAX_IMAGE_WIDTH, round(h * MAX_IMAGE_WIDTH / w)), Image.LANCZOS)

    processed = _encode(img, 80)
    if len(processed) > MAX_IMAGE_BYTES:
        processed = _encode(img, 60)
    return processed


def crop_for_viewport(image_bytes: bytes, viewport: str) -> bytes:
    """Center-crop an image to cover the given viewport size."""
    if viewport not in VIEWPORT_CROPS:
        raise ValueError(f"Unknown viewport: {viewport}")
    img = _to_rgb(Image.open(io.BytesIO(image_bytes)))
    cropped = ImageOps.fit(img, VIEWPORT_CROPS[viewport], Image.LANCZOS, centering=(0.5, 0.5))
    return _encode(cropped, 80)


def dominant_colors(image_bytes: bytes, limit: int = 5) -> list[dict]:
    """
    Quantize an image into 32-step RGB buckets and return the most common ones.
    Transparent and near-black/near-white buckets are dropped.
    """
    img = Image.open(io.BytesIO(image_bytes)).convert("RGBA")
    img.thumbnail((200, 200))
    pixels = list(img.getdata())

    counts = {}
    # Sample every 4th pixel
    for r, g, b, a in pixels[::4]:
        if a < 128:
            continue
        key = tuple(min(round(c / 32) * 32, 255) for c in (r, g, b))
        counts[key] = counts.get(key, 0) + 1

    top = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:10]
    total = len(pixels) or 1

    result = []
    for (r, g, b), count in top:
        brightness = 0.299 * r + 0.587 * g + 0.114 * b
        if not 30 < brightness < 225:
            continue
        result.append({
            "hex": f"#{r:02x}{g:02x}{b:02x}",
            "rgb": {"r": r, "g": g, "b": b},
            "percentage": count / total * 100,
        })
    return result[:limit]


async def extract_logo_colors(logo_url: str) -> list[dict]:
    """Download a logo and return up to 5 dominant brand colors."""
    image_bytes = await download_image(logo_url)
    colors = dominant_colors(image_bytes)
    print(f"  [logo-colors] {len(colors)} colors from {logo_url}")
    return colors
