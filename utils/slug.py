import secrets
import string

from slugify import slugify

SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
SUFFIX_LENGTH = 5


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(length))


def make_slug(title: str) -> str:
    """`My Big Idea` -> `my-big-idea-x7k2p`."""
    base = slugify(title) or "idea"
    return f"{base}-{random_suffix()}"
