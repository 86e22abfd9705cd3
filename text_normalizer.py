# file: text_normalizer.py
import re

# l and | are the usual OCR misreads of the digit 1
_ONE_LOOKALIKES = re.compile(r'[l|]')


def normalize_text(raw_text: str) -> str:
    """Canonicalizes OCR text before any pattern matching.

    Applied in order: l and | become 1, commas become dots, then the whole
    string is uppercased. Nothing else is touched, so newlines survive.
    """
    text = _ONE_LOOKALIKES.sub('1', raw_text)
    text = text.replace(',', '.')
    return text.upper()
