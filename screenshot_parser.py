# file: screenshot_parser.py
import math
import re
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional

from models import CANONICAL_DATETIME_FORMAT, ExtractionResult
from symbol_set import DEFAULT_SYMBOLS, KnownSymbolSet
from text_normalizer import normalize_text

LOT_SIZE_MIN = 0.01
LOT_SIZE_MAX = 100.0


class PatternRule(NamedTuple):
    """One matcher in a field's fallback chain.

    `convert` turns a match into the field value, or None when the field's
    validator rejects it and scanning should move on.
    """
    name: str
    pattern: re.Pattern
    convert: Callable[[re.Match], Optional[object]]


def _first_value(rules: List[PatternRule], text: str):
    for rule in rules:
        for match in rule.pattern.finditer(text):
            value = rule.convert(match)
            if value is not None:
                return value
    return None


def _positive_price(match: re.Match) -> Optional[float]:
    value = float(match.group(1))
    return value if math.isfinite(value) and value > 0 else None


def _valid_lot_size(value: float) -> Optional[float]:
    return value if math.isfinite(value) and LOT_SIZE_MIN <= value <= LOT_SIZE_MAX else None


def _lot_size(match: re.Match) -> Optional[float]:
    return _valid_lot_size(float(match.group(1)))


def _canonical_timestamp(match: re.Match) -> Optional[str]:
    year, month, day, hour, minute = (int(g) for g in match.group(1, 2, 3, 4, 5))
    try:
        stamp = datetime(year, month, day, hour, minute)
    except ValueError:
        return None
    return stamp.strftime(CANONICAL_DATETIME_FORMAT)


# Forex quote: integer part, dot, 3-5 fractional digits
_QUOTE = r'[0-9]+\.[0-9]{3,5}'

# OCR renders the entry -> exit arrow as any run of these
_ARROW = r'[→\->~»]+'

ENTRY_PRICE_RULES = [
    PatternRule('arrow_pair', re.compile(rf'({_QUOTE})\s*{_ARROW}\s*{_QUOTE}'), _positive_price),
    PatternRule('spaced_pair', re.compile(rf'({_QUOTE})\s+{_QUOTE}'), _positive_price),
    PatternRule('five_digit_quote', re.compile(r'(?<![0-9.])([0-9]+\.[0-9]{5})(?![0-9])'), _positive_price),
]

STOP_LOSS_RULES = [
    PatternRule('stop_loss_label', re.compile(r'S/?L[:\s]*([0-9]+\.[0-9]{3,5})(?![0-9])', re.IGNORECASE), _positive_price),
]

TAKE_PROFIT_RULES = [
    PatternRule('take_profit_label', re.compile(r'T/?P[:\s]*([0-9]+\.[0-9]{3,5})(?![0-9])', re.IGNORECASE), _positive_price),
]

ENTRY_TIMESTAMP_RULES = [
    PatternRule(
        'date_time',
        re.compile(r'([0-9]{4})[./-]([0-9]{1,2})[./-]([0-9]{1,2})\s+([0-9]{1,2}):([0-9]{2})(?::([0-9]{2}))?'),
        _canonical_timestamp,
    ),
]

LOT_SIZE_RULES = [
    # direction adjacency stays on one line and needs a standalone number
    PatternRule('after_direction', re.compile(r'\b(?:SELL|BUY)[ \t]+([0-9]+\.?[0-9]*)(?![0-9:])', re.IGNORECASE), _lot_size),
    PatternRule('before_direction', re.compile(r'(?<![0-9.:])\b([0-9]+\.?[0-9]*)[ \t]+(?:SELL|BUY)\b', re.IGNORECASE), _lot_size),
    PatternRule('bare_decimal', re.compile(r'\b([0-9]+\.[0-9]{1,2})\b(?:\s*LOTS?\b)?', re.IGNORECASE), _lot_size),
]

_STANDALONE_SELL = re.compile(r'\bSELL\b', re.IGNORECASE)
_STANDALONE_BUY = re.compile(r'\bBUY\b', re.IGNORECASE)


def extract_instrument(text: str, symbols: KnownSymbolSet = DEFAULT_SYMBOLS) -> Dict[str, object]:
    """Symbol, direction and lot size. A joint "SYMBOL SELL 1.1" hit is preferred."""
    found: Dict[str, object] = {}

    for symbol in symbols.symbols:
        joint = re.search(rf'({re.escape(symbol)})\s*(SELL|BUY|S)\s*([0-9]+\.?[0-9]*)', text, re.IGNORECASE)
        if joint:
            found['symbol'] = joint.group(1).upper()
            found['direction'] = 'long' if joint.group(2).upper() in ('BUY', 'B') else 'short'
            lot_size = _valid_lot_size(float(joint.group(3)))
            if lot_size is not None:
                found['lot_size'] = lot_size
            break

    if 'symbol' not in found:
        for symbol in symbols.symbols:
            if symbol in text:
                found['symbol'] = symbol
                break

    if 'direction' not in found:
        if _STANDALONE_SELL.search(text):
            found['direction'] = 'short'
        elif _STANDALONE_BUY.search(text):
            found['direction'] = 'long'

    if 'lot_size' not in found:
        lot_size = _first_value(LOT_SIZE_RULES, text)
        if lot_size is not None:
            found['lot_size'] = lot_size

    return found


def extract_entry_price(text: str) -> Dict[str, object]:
    # Only the first rule that matches anywhere is applied
    entry_price = _first_value(ENTRY_PRICE_RULES, text)
    return {'entry_price': entry_price} if entry_price is not None else {}


def extract_stops(text: str) -> Dict[str, object]:
    found = {}
    stop_loss = _first_value(STOP_LOSS_RULES, text)
    if stop_loss is not None:
        found['stop_loss'] = stop_loss
    take_profit = _first_value(TAKE_PROFIT_RULES, text)
    if take_profit is not None:
        found['take_profit'] = take_profit
    return found


def extract_entry_timestamp(text: str) -> Dict[str, object]:
    entry_timestamp = _first_value(ENTRY_TIMESTAMP_RULES, text)
    return {'entry_timestamp': entry_timestamp} if entry_timestamp is not None else {}


def parse_screenshot_text(raw_text: str, symbols: KnownSymbolSet = DEFAULT_SYMBOLS) -> ExtractionResult:
    """Parses OCR output of an MT5 trade screenshot into a partial ExtractionResult.

    Example input:
        GBPUSD SELL 1.1
        1.35119 → 1.35131
        S/L: 1.35346
        T/P: 1.34535
        2025.12.24 09:33:32

    Never raises on unmatched text; fields that were not found stay None.
    """
    text = normalize_text(raw_text)

    fields: Dict[str, object] = {}
    fields.update(extract_instrument(text, symbols))
    fields.update(extract_entry_price(text))
    fields.update(extract_stops(text))
    fields.update(extract_entry_timestamp(text))

    return ExtractionResult(**fields)
