# biztime/slug.py

from slugify import slugify


def make_code(name: str) -> str:
    """
    Derive a URL-safe code from a display name: "Test Company" -> "test-company".
    """
    return slugify(name, lowercase=True)
