import asyncio
import io

import httpx
import pytest
from PIL import Image

from sitepolish.image_utils import (
    MAX_IMAGE_WIDTH,
    crop_for_viewport,
    dominant_colors,
    process_image,
    screenshot_to_b64,
)
from sitepolish.media_analyzer import analyze_all_variations, analyze_media_requirements
from sitepolish.stock_media import (
    StockMediaError,
    auto_populate_media,
    generate_search_queries,
    search_images,
    search_videos,
)


def _png(size=(400, 300), color=(30, 58, 138), mode="RGB") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format="PNG")
    return buf.getvalue()


# ---------------------------------------------------------------------------
# image_utils
# ---------------------------------------------------------------------------

def test_process_image_limits_width():
    processed = process_image(_png((2400, 1200)))
    img = Image.open(io.BytesIO(processed))
    assert img.size == (MAX_IMAGE_WIDTH, 960)


def test_process_image_flattens_transparency():
    processed = process_image(_png((100, 100), (255, 0, 0, 0), mode="RGBA"))
    assert Image.open(io.BytesIO(processed)).mode == "RGB"


def test_crop_for_viewport():
    cropped = crop_for_viewport(_png((3000, 3000)), "mobile")
    assert Image.open(io.BytesIO(cropped)).size == (767, 600)
    with pytest.raises(ValueError):
        crop_for_viewport(_png(), "watch")


def test_screenshot_to_b64_compresses_to_jpeg():
    data, media_type = screenshot_to_b64(_png((1920, 1080)))
    assert media_type == "image/jpeg"
    assert data

    raw, raw_type = screenshot_to_b64(_png(), compress=False)
    assert raw_type == "image/png"


def test_dominant_colors_skip_near_white():
    img = Image.new("RGB", (100, 100), (255, 255, 255))
    img.paste((30, 58, 138), (0, 0, 60, 100))
    buf = io.BytesIO()
    img.save(buf, format="PNG")

    colors = dominant_colors(buf.getvalue())
    assert len(colors) == 1
    assert colors[0]["hex"] == "#204080"
    assert colors[0]["percentage"] > 0


# ---------------------------------------------------------------------------
# media_analyzer
# ---------------------------------------------------------------------------

def test_media_requirements_count_widgets():
    structure = {
        "globalHeader": {"widgets": [{"type": "site-logo"}]},
        "sections": [
            {"widgets": [
                {"type": "image"},
                {"type": "image-gallery", "imageCount": 6},
                {"type": "testimonial", "showPhoto": True},
                {"type": "call-to-action", "backgroundType": "image"},
                {"type": "call-to-action"},
                {"type": "video"},
                {"type": "heading"},
            ]},
            {"widgets": [{"type": "container", "widgets": [{"type": "image-box"}]}]},
        ],
    }
    req = analyze_media_requirements(structure)
    assert req["images"] == 10
    assert req["videos"] == 1
    assert req["total"] == 11
    assert req["has_image_widgets"] and req["has_video_widgets"]
    assert "site-logo" in req["widget_types"]


def test_media_requirements_for_bad_input():
    assert analyze_media_requirements(None)["images"] == 0


def test_all_variations_take_the_maximum():
    variations = [
        {"widgetStructure": {"sections": [{"widgets": [{"type": "image"}] * 3}]}},
        {"widgetStructure": {"sections": [{"widgets": [{"type": "video-gallery"}]}]}},
        {"widgetStructure": {"sections": []}},
    ]
    total = analyze_all_variations(variations)
    assert total["images"] == 3
    assert total["videos"] == 3


# ---------------------------------------------------------------------------
# stock_media
# ---------------------------------------------------------------------------

UNSPLASH_RESPONSE = {
    "total": 1,
    "total_pages": 1,
    "results": [{
        "id": "abc",
        "urls": {"regular": "https://images.unsplash.com/abc", "thumb": "https://images.unsplash.com/abc-t"},
        "alt_description": "dentist office",
        "user": {"name": "Jane"},
        "links": {"html": "https://unsplash.com/@jane"},
    }],
}

PEXELS_RESPONSE = {
    "total_results": 1,
    "page": 1,
    "per_page": 15,
    "videos": [{
        "id": 7,
        "image": "https://images.pexels.com/7.jpg",
        "width": 1920,
        "height": 1080,
        "duration": 12,
        "user": {"name": "Sam", "url": "https://pexels.com/@sam"},
        "video_files": [
            {"quality": "sd", "width": 640, "link": "https://videos.pexels.com/7-sd.mp4"},
            {"quality": "hd", "width": 1920, "link": "https://videos.pexels.com/7-hd.mp4"},
        ],
    }],
}


def _stock_transport(calls=None):
    def handler(request):
        if calls is not None:
            calls.append(request)
        if "unsplash" in request.url.host:
            return httpx.Response(200, json=UNSPLASH_RESPONSE)
        return httpx.Response(200, json=PEXELS_RESPONSE)
    return httpx.MockTransport(handler)


@pytest.fixture
def stock_keys(monkeypatch):
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "unsplash-key")
    monkeypatch.setenv("PEXELS_API_KEY", "pexels-key")


def test_search_images_requires_key(monkeypatch):
    monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "")
    with pytest.raises(ValueError):
        asyncio.run(search_images("dentist", transport=_stock_transport()))


def test_search_images_maps_results(stock_keys):
    calls = []
    result = asyncio.run(search_images("dentist", per_page=5, orientation="landscape",
                                       transport=_stock_transport(calls)))

    assert result["total"] == 1
    image = result["images"][0]
    assert image["url"] == "https://images.unsplash.com/abc"
    assert image["type"] == "image" and image["source"] == "unsplash"
    assert calls[0].headers["Authorization"] == "Client-ID unsplash-key"
    assert calls[0].url.params["orientation"] == "landscape"


def test_search_videos_prefers_hd_file(stock_keys):
    result = asyncio.run(search_videos("dentist", transport=_stock_transport()))
    video = result["videos"][0]
    assert video["url"] == "https://videos.pexels.com/7-hd.mp4"
    assert video["source"] == "pexels"


def test_provider_error_raises(stock_keys):
    transport = httpx.MockTransport(lambda request: httpx.Response(401, text="bad key"))
    with pytest.raises(StockMediaError) as exc:
        asyncio.run(search_images("dentist", transport=transport))
    assert exc.value.status_code == 401


def test_search_queries_for_known_and_unknown_industry():
    assert generate_search_queries("dental-practice") == ["dental clinic", "dentist office", "dental care"]
    assert generate_search_queries("underwater-welding") == [
        "underwater welding",
        "underwater welding business",
        "underwater welding professional",
    ]


def test_auto_populate_media(stock_keys):
    result = asyncio.run(auto_populate_media("dental-practice", image_count=2, video_count=1,
                                             transport=_stock_transport()))
    assert result["success"] is True
    assert [m["type"] for m in result["media"]] == ["image", "video"]


def test_auto_populate_media_tolerates_provider_failures(stock_keys):
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="down"))
    result = asyncio.run(auto_populate_media("dental-practice", transport=transport))
    assert result["success"] is False
    assert result["media"] == []
    assert result["error"] == "No media found for this industry"


def test_auto_populate_media_without_industry():
    result = asyncio.run(auto_populate_media(""))
    assert result["error"] == "No industry provided"
