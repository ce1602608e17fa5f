"""
Short prefixed ID generator for newspaper entities.

Format: {prefix}_{base36_random}
- ar_xxxxxxxx  - article
- cm_xxxxxxxx  - comment
- th_xxxxxxxx  - theme

8 chars base36 = 36^8 = 2.8 trillion unique IDs per type
Total length: 11 chars (2 prefix + underscore + 8 random)

Users keep UUIDs (issued by the account system, not by this service).
"""
import secrets

# Base36 alphabet (lowercase letters + digits)
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)  # 36

# Valid prefixes
PREFIXES = {
    'article': 'ar',
    'comment': 'cm',
    'theme': 'th',
}


def _random_base36(length: int = 8) -> str:
    """Generate random base36 string"""
    return ''.join(ALPHABET[secrets.randbelow(BASE)] for _ in range(length))


def generate_id(entity_type: str) -> str:
    """
    Generate a new short ID for the given entity type.

    Args:
        entity_type: One of 'article', 'comment', 'theme'

    Returns:
        Short ID like 'ar_x5b8r2yj'

    Raises:
        ValueError: If entity_type is invalid
    """
    if entity_type not in PREFIXES:
        raise ValueError(f"Invalid entity type: {entity_type}. "
                         f"Must be one of: {list(PREFIXES.keys())}")

    return f"{PREFIXES[entity_type]}_{_random_base36(8)}"


def generate_article_id() -> str:
    """Generate a new article ID"""
    return generate_id('article')


def generate_comment_id() -> str:
    """Generate a new comment ID"""
    return generate_id('comment')


def generate_theme_id() -> str:
    """Generate a new theme ID"""
    return generate_id('theme')
