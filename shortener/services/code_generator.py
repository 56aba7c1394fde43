"""
Short Code Generator

Short codes are random strings drawn from a 57 character alphabet that leaves
out glyphs that are easy to confuse when read aloud or typed (0/O, 1/l/I).

nanoid draws from os.urandom, so codes are not predictable from earlier ones.
With the default length of 6 there are 57^6 (~34 billion) possible codes;
collisions are handled by the caller with a bounded retry.
"""

from nanoid import generate

DEFAULT_SHORT_CODE_LENGTH = 6

SHORT_CODE_ALPHABET = "23456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ"


def generate_short_code(length: int = DEFAULT_SHORT_CODE_LENGTH) -> str:
    """
    Generate a random short code.

    Args:
        length: Number of characters; non-positive values fall back to 6

    Returns:
        Short code string
    """
    if length <= 0:
        length = DEFAULT_SHORT_CODE_LENGTH
    return generate(SHORT_CODE_ALPHABET, length)
