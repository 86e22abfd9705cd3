# file: symbol_set.py
from typing import Iterable, Tuple
from pydantic import BaseModel, ConfigDict, field_validator


class KnownSymbolSet(BaseModel):
    """Ordered, immutable list of instrument codes used to anchor matching.

    Order is the matching priority. Use `extended()` to build a new set
    instead of mutating an existing one.
    """
    model_config = ConfigDict(frozen=True)

    symbols: Tuple[str, ...]

    @field_validator('symbols', mode='before')
    @classmethod
    def _canonicalize(cls, value):
        seen = []
        for raw in value:
            symbol = str(raw).strip().upper()
            if not symbol:
                raise ValueError("Symbol codes must not be blank")
            if symbol not in seen:
                seen.append(symbol)
        return tuple(seen)

    def extended(self, extra: Iterable[str]) -> "KnownSymbolSet":
        return KnownSymbolSet(symbols=self.symbols + tuple(extra))

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.upper() in self.symbols


DEFAULT_SYMBOLS = KnownSymbolSet(symbols=(
    # majors and crosses
    'GBPUSD', 'EURUSD', 'USDCAD', 'USDJPY', 'AUDUSD', 'NZDUSD', 'USDCHF',
    'EURGBP', 'EURJPY', 'GBPJPY', 'AUDJPY', 'CADJPY', 'CHFJPY',
    # metals, crypto, indices
    'XAUUSD', 'XAGUSD', 'BTCUSD', 'ETHUSD', 'US30', 'US500', 'USTEC',
    'GER40', 'UK100', 'FRA40', 'JPN225',
))
