# inventory_sdk/icons.py
from typing import Dict, List, Optional

# Icon names are what gets stored on a product; glyphs are only looked up
# when a row is drawn.
ICON_GLYPHS: Dict[str, str] = {
    # Electronics
    "laptop": "💻",
    "smartphone": "📱",
    "tv": "📺",
    # Clothing
    "shirt": "👕",
    # Books
    "book": "📖",
    # Beauty
    "palette": "🎨",
    # Sports
    "dumbbell": "🏋️",
    # Home
    "home": "🏠",
    # Default/Others
    "package": "📦",
    "cart": "🛒",
}

DEFAULT_ICON = "package"


def available_icon_names() -> List[str]:
    return list(ICON_GLYPHS)


def resolve_icon_name(name: Optional[str]) -> str:
    """Return ``name`` if it is a known icon, otherwise the default icon name."""
    key = (name or "").strip().lower()
    return key if key in ICON_GLYPHS else DEFAULT_ICON


def get_icon_glyph(name: Optional[str]) -> str:
    return ICON_GLYPHS[resolve_icon_name(name)]
