"""
Stock photo (Unsplash) and stock video (Pexels) search, plus industry-based
auto-population of a project's media library.
"""

import asyncio

import httpx

from sitepolish.config import get_settings


UNSPLASH_SEARCH_URL = "https://api.unsplash.com/search/photos"
PEXELS_VIDEO_SEARCH_URL = "https://api.pexels.com/videos/search"
REQUEST_TIMEOUT = 15.0

INDUSTRY_QUERIES = {
    # Food & beverage
    "bakery": ["fresh bread bakery", "artisan bakery", "bakery interior"],
    "restaurant": ["restaurant food", "dining experience", "chef cooking"],
    "cafe": ["coffee shop", "cafe interior", "barista"],
    "catering": ["catering food", "event catering", "buffet"],
    # Professional services
    "legal": ["law office", "legal professionals", "justice"],
    "law": ["law office", "legal professionals", "justice"],
    "accounting": ["accountant office", "financial planning", "business finance"],
    "consulting": ["business consulting", "professional meeting", "strategy"],
    "marketing": ["digital marketing", "creative team", "brand strategy"],
    # Healthcare
    "healthcare": ["medical professionals", "hospital care", "health"],
    "dental": ["dental clinic", "dentist office", "dental care"],
    "wellness": ["wellness spa", "meditation", "healthy lifestyle"],
    "fitness": ["gym workout", "fitness training", "exercise"],
    # Tech
    "technology": ["tech startup", "software development", "innovation"],
    "saas": ["cloud computing", "digital workspace", "tech team"],
    "web design": ["web design", "ui ux design", "creative workspace"],
    # Retail
    "retail": ["retail store", "shopping experience", "product display"],
    "fashion": ["fashion boutique", "clothing store", "style"],
    "jewelry": ["jewelry store", "luxury jewelry", "gems"],
    "home decor": ["home interior", "modern furniture", "decor"],
    # Real estate & construction
    "real estate": ["modern house", "property architecture", "real estate"],
    "real-estate": ["modern house", "property architecture", "real estate"],
    "construction": ["construction site", "building contractor", "architecture"],
    "interior design": ["interior design", "home staging", "modern interior"],
    # Travel & hospitality
    "hotel": ["luxury hotel", "hotel lobby", "hospitality"],
    "travel": ["travel destination", "adventure travel", "vacation"],
    "tourism": ["tourist attraction", "travel experience", "destination"],
    # Education
    "education": ["classroom learning", "students studying", "education"],
    "tutoring": ["private tutoring", "student success", "learning"],
    # Automotive & transport
    "vehicle-transport": ["car carrier truck", "vehicle shipping", "auto transport"],
    "automotive": ["car dealership", "luxury car", "automotive"],
    "car repair": ["auto repair shop", "mechanic working", "car service"],
    # Beauty
    "salon": ["hair salon", "beauty salon", "hairstyling"],
    "spa": ["spa treatment", "massage spa", "relaxation"],
    "beauty": ["beauty products", "cosmetics", "skincare"],
    # Sports & recreation
    "sports": ["sports training", "athletic performance", "fitness"],
    "outdoor": ["outdoor adventure", "hiking nature", "camping"],
    "golf": ["golf course", "golf club", "golfing"],
    # Creative
    "photography": ["professional photography", "camera equipment", "photo studio"],
    "videography": ["video production", "film making", "cinematography"],
    "music": ["music studio", "live performance", "musician"],
    # Home services
    "home-services": ["home repair", "handyman tools", "house maintenance"],
    "plumbing": ["plumber working", "home repair", "plumbing service"],
    "electrical": ["electrician working", "electrical service", "home wiring"],
    "cleaning": ["house cleaning", "professional cleaning", "clean home"],
    # Financial
    "insurance": ["insurance agent", "family protection", "financial security"],
    "investment": ["investment planning", "financial growth", "stock market"],
    "banking": ["bank branch", "financial services", "banking"],
    # Pets
    "veterinary": ["veterinary clinic", "pet care", "animal doctor"],
    "pet grooming": ["dog grooming", "pet salon", "pet care"],
}


class StockMediaError(Exception):
    """A stock provider answered with an error status."""

    def __init__(self, provider: str, status_code: int, detail: str = ""):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider} API error ({status_code}): {detail[:300]}")


def generate_search_queries(industry: str) -> list[str]:
    """Search terms for an industry, best first."""
    industry_lower = industry.lower()
    for key, queries in INDUSTRY_QUERIES.items():
        if key in industry_lower:
            return queries
    readable = industry.replace("-", " ")
    return [readable, f"{readable} business", f"{readable} professional"]


def _pick_video_file(video: dict) -> dict:
    files = video.get("video_files") or []
    for f in files:
        if f.get("quality") == "hd" or f.get("width") == 1920:
            return f
    return files[0] if files else {}


async def search_images(query: str, page: int = 1, per_page: int = 20, orientation: str | None = None,
                        transport: httpx.AsyncBaseTransport | None = None) -> dict:
    """Search Unsplash. Raises ValueError without an access key."""
    access_key = get_settings().unsplash_access_key
    if not access_key:
        raise ValueError("Unsplash API not configured. Add UNSPLASH_ACCESS_KEY to environment variables.")

    params = {"query": query, "page": page, "per_page": per_page}
    if orientation:
        params["orientation"] = orientation

    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=transport) as client:
        resp = await client.get(
            UNSPLASH_SEARCH_URL,
            params=params,
            headers={"Authorization": f"Client-ID {access_key}"},
        )
    if resp.status_code != 200:
        raise StockMediaError("Unsplash", resp.status_code, resp.text)

    data = resp.json()
    images = [
        {
            "id": img.get("id"),
            "type": "image",
            "url": img["urls"]["regular"],
            "thumbnail": img["urls"].get("thumb"),
            "alt": img.get("alt_description") or query,
            "photographer": (img.get("user") or {}).get("name"),
            "photographer_url": (img.get("links") or {}).get("html"),
            "source": "unsplash",
        }
        for img in data.get("results", [])
    ]
    return {"images": images, "total": data.get("total", 0), "total_pages": data.get("total_pages", 0)}


async def search_videos(query: str, page: int = 1, per_page: int = 15,
                        transport: httpx.AsyncBaseTransport | None = None) -> dict:
    """Search Pexels videos. Raises ValueError without an API key."""
    api_key = get_settings().pexels_api_key
    if not api_key:
        raise ValueError("Pexels API not configured. Add PEXELS_API_KEY to environment variables.")

    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=transport) as client:
        resp = await client.get(
            PEXELS_VIDEO_SEARCH_URL,
            params={"query": query, "page": page, "per_page": per_page},
            headers={"Authorization": api_key},
        )
    if resp.status_code != 200:
        raise StockMediaError("Pexels", resp.status_code, resp.text)

    data = resp.json()
    videos = []
    for video in data.get("videos", []):
        video_file = _pick_video_file(video)
        videos.append({
            "id": video.get("id"),
            "type": "video",
            "url": video_file.get("link"),
            "thumbnail": video.get("image"),
            "width": video.get("width"),
            "height": video.get("height"),
            "duration": video.get("duration"),
            "photographer": (video.get("user") or {}).get("name"),
            "photographer_url": (video.get("user") or {}).get("url"),
            "alt": query,
            "source": "pexels",
        })
    return {
        "videos": videos,
        "total": data.get("total_results", 0),
        "page": data.get("page", page),
        "per_page": data.get("per_page", per_page),
    }


async def _fetch_images(query: str, count: int, transport=None) -> list:
    if count <= 0:
        return []
    try:
        result = await search_images(query, per_page=count, orientation="landscape", transport=transport)
        return result["images"]
    except Exception as e:
        print(f"  [stock-media] Unsplash fetch failed for '{query}': {e}")
        return []


async def _fetch_videos(query: str, count: int, transport=None) -> list:
    if count <= 0:
        return []
    try:
        result = await search_videos(query, per_page=count, transport=transport)
        return result["videos"]
    except Exception as e:
        print(f"  [stock-media] Pexels fetch failed for '{query}': {e}")
        return []


async def auto_populate_media(industry: str, image_count: int = 5, video_count: int = 3,
                              transport: httpx.AsyncBaseTransport | None = None) -> dict:
    """
    Fetch stock media for an industry. Provider failures yield no items rather
    than an error. Returns {"media", "search_query", "success", "error"}.
    """
    if not industry:
        return {"media": [], "search_query": "", "success": False, "error": "No industry provided"}

    queries = generate_search_queries(industry)
    primary = queries[0]
    print(f"  [stock-media] Fetching {image_count} images / {video_count} videos for '{primary}'")

    images, videos = await asyncio.gather(
        _fetch_images(primary, image_count, transport),
        _fetch_videos(primary, video_count, transport),
    )
    media = images + videos

    if not media and len(queries) > 1:
        print(f"  [stock-media] No results, trying fallback query '{queries[1]}'")
        images, videos = await asyncio.gather(
            _fetch_images(queries[1], image_count, transport),
            _fetch_videos(queries[1], video_count, transport),
        )
        media = images + videos

    return {
        "media": media,
        "search_query": primary,
        "success": bool(media),
        "error": None if media else "No media found for this industry",
    }
