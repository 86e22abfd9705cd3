# file: models.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

Direction = Literal['long', 'short']
TradeStatus = Literal['open', 'closed']

CANONICAL_DATETIME_FORMAT = "%Y-%m-%dT%H:%M"


class ExtractionResult(BaseModel):
    """Partial trade record recovered from a screenshot. None means not recovered."""
    model_config = ConfigDict(frozen=True)

    symbol: Optional[str] = None
    direction: Optional[Direction] = None
    lot_size: Optional[float] = Field(default=None, gt=0)
    entry_price: Optional[float] = Field(default=None, gt=0)
    stop_loss: Optional[float] = Field(default=None, gt=0)
    take_profit: Optional[float] = Field(default=None, gt=0)
    entry_timestamp: Optional[str] = Field(default=None, pattern=r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$')

    def present_fields(self) -> dict:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.present_fields()


class TradeFormData(BaseModel):
    """Editable trade form state that extraction results are overlaid onto."""
    symbol: str = "GBPUSD"
    direction: Direction = 'long'
    entry_price: float = 0.0
    exit_price: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    lot_size: float = 0.01
    entry_date: str = Field(default_factory=lambda: datetime.now().strftime(CANONICAL_DATETIME_FORMAT))
    exit_date: Optional[str] = None
    pnl: Optional[float] = None
    status: TradeStatus = 'open'
    entry_reason: str = ""
    notes: str = ""
    after_review: str = ""
    tags: List[str] = Field(default_factory=list)
