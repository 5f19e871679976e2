"""
Tags are stored on the content row as a single comma-joined string.

There is no escaping: a tag that itself contains a comma comes back as two tags.
"""
from typing import Iterable, List

TAG_DELIMITER = ","


def encode_tags(tags: Iterable[str]) -> str:
    """Join tags into the stored field. An empty list encodes to ""."""
    return TAG_DELIMITER.join(tags)


def decode_tags(field: str) -> List[str]:
    """Split the stored field back into tags. "" decodes to [""]."""
    return field.split(TAG_DELIMITER)
