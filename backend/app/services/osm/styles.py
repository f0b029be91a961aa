"""Display styles for POI categories.

Keyed by the raw OSM ``shop``/``amenity`` value. Read-only, built at import.
"""

from dataclasses import dataclass
from types import MappingProxyType

DEFAULT_ICON = "🏪"
DEFAULT_COLOR = "#2e3450"


@dataclass(frozen=True)
class CategoryStyle:
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR


DEFAULT_STYLE = CategoryStyle()

CATEGORY_STYLES = MappingProxyType({
    # Food
    "restaurant": CategoryStyle("🍽", "#ff6b35"),
    "cafe": CategoryStyle("☕", "#6b3a2a"),
    "fast_food": CategoryStyle("🍔", "#ff4500"),
    "food_court": CategoryStyle("🍱"),
    "bakery": CategoryStyle("🥐"),
    # Shopping
    "supermarket": CategoryStyle("🛒", "#004c97"),
    "mall": CategoryStyle("🏬", "#1a1a2e"),
    "convenience": CategoryStyle("🏪"),
    "clothes": CategoryStyle("👗", "#d4145a"),
    "electronics": CategoryStyle("📱", "#3563e9"),
    "jewellery": CategoryStyle("💍"),
    "beauty": CategoryStyle("💄"),
    "hairdresser": CategoryStyle("💈"),
    "sports": CategoryStyle("🏃"),
    "books": CategoryStyle("📚"),
    # Services
    "pharmacy": CategoryStyle("💊", "#00468b"),
    "hospital": CategoryStyle("🏥", "#e63946"),
    "bank": CategoryStyle("🏦", "#22409a"),
    "atm": CategoryStyle("🏦", "#22409a"),
    "cinema": CategoryStyle("🎬", "#c62a2a"),
    "fuel": CategoryStyle("⛽", "#ffb800"),
})


def style_for(category: str) -> CategoryStyle:
    return CATEGORY_STYLES.get(category, DEFAULT_STYLE)
