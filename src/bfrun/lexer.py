from typing import List, Tuple, Union

BF_OPS = frozenset('+-<>.,[]')


def as_text(source: Union[str, bytes, bytearray]) -> str:
    """Return source as text; bytes map one-to-one so offsets survive."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source).decode('latin-1')
    return source


def filter_source(source: Union[str, bytes, bytearray]) -> List[Tuple[int, str]]:
    """Keep only instruction symbols, paired with their offset in the raw source."""
    text = as_text(source)
    return [(pos, ch) for pos, ch in enumerate(text) if ch in BF_OPS]
