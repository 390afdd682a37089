"""
Redis constants and configuration.
Centralizes TTLs and key prefixes for better visibility and management.
"""

# =============================================================================
# TTL (Time To Live) Constants (in seconds)
# =============================================================================

# Latest ingredient price; a price added elsewhere may stay invisible this long
INGREDIENT_PRICE_CACHE_TTL = 300  # 5 minutes


# =============================================================================
# Key Prefixes
# =============================================================================

PREFIX_CACHE_INGREDIENT_PRICE_TEMPLATE = "cache:ingredient:{ingredient_id}:price"


def get_ingredient_price_cache_key(ingredient_id: str) -> str:
    """Generate cache key for the latest price of an ingredient."""
    return PREFIX_CACHE_INGREDIENT_PRICE_TEMPLATE.format(ingredient_id=ingredient_id)
