# file: config.py
import os
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from symbol_set import DEFAULT_SYMBOLS, KnownSymbolSet


def _env(name: str, default=None):
    return lambda: os.getenv(name, default)


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    # Values are read from the environment when Settings() is instantiated,
    # not at import, so a .env loaded later is still honoured.
    tesseract_cmd: Optional[str] = Field(default_factory=_env("TESSERACT_CMD"))
    ocr_lang: str = Field(default_factory=_env("OCR_LANG", "eng"))
    ocr_upscale_factor: int = Field(default_factory=_env("OCR_UPSCALE_FACTOR", "2"), ge=1, le=6)
    extra_symbols: List[str] = Field(default_factory=_env("EXTRA_SYMBOLS", ""))

    @field_validator('extra_symbols', mode='before')
    @classmethod
    def _split_symbols(cls, value):
        if isinstance(value, str):
            return [s.strip() for s in value.split(',') if s.strip()]
        return value

    @field_validator('tesseract_cmd', mode='before')
    @classmethod
    def _blank_is_unset(cls, value):
        return value or None

    def known_symbols(self) -> KnownSymbolSet:
        if not self.extra_symbols:
            return DEFAULT_SYMBOLS
        return DEFAULT_SYMBOLS.extended(self.extra_symbols)


def load_settings() -> Settings:
    return Settings()
