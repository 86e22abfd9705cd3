# file: ocr_engine.py
import asyncio
import io
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

import pytesseract
from PIL import Image, ImageEnhance, ImageOps

from event_logger import log_event, log_extraction, log_ocr_text
from models import ExtractionResult
from screenshot_parser import parse_screenshot_text
from symbol_set import DEFAULT_SYMBOLS, KnownSymbolSet

ProgressCallback = Callable[[int], None]

OCR_FAILED_MESSAGE = "Failed to extract text from image"


class ScreenshotExtractionError(Exception):
    """The OCR step failed; the text parser was never reached."""


class ProgressReporter:
    """Forwards progress to a callback as whole percentages that never go down."""

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self._callback = callback
        self.last = -1

    def __call__(self, percent: float):
        value = max(0, min(100, int(round(percent))))
        if value < self.last:
            return
        self.last = value
        if self._callback:
            self._callback(value)


class OcrEngine(ABC):
    """Turns an image into raw text, reporting progress along the way."""

    @abstractmethod
    async def recognize(self, image: bytes, on_progress: Optional[ProgressCallback] = None) -> str:
        pass


# pytesseract keeps the binary path in a module global
_TESSERACT_CMD_LOCK = threading.Lock()


class TesseractOcrEngine(OcrEngine):
    """
    OCR through the Tesseract binary. A custom `tesseract_cmd` is kept on the
    instance and only swapped into pytesseract for the duration of a call.
    """

    def __init__(self, lang: str = "eng", tesseract_cmd: Optional[str] = None, upscale_factor: int = 2):
        if upscale_factor < 1:
            raise ValueError("upscale_factor must be at least 1.")
        self.lang = lang
        self.upscale_factor = upscale_factor
        self.tesseract_cmd = tesseract_cmd

    def preprocess(self, raw: bytes) -> Image.Image:
        """
        Screenshot clean-up before OCR:
        - grayscale
        - upscale (helps small labels)
        - mild contrast boost
        """
        img = Image.open(io.BytesIO(raw))
        img = ImageOps.grayscale(img.convert("RGB"))
        if self.upscale_factor > 1:
            img = img.resize((img.size[0] * self.upscale_factor, img.size[1] * self.upscale_factor))
        return ImageEnhance.Contrast(img).enhance(1.15)

    def image_to_string(self, img: Image.Image) -> str:
        if not self.tesseract_cmd:
            return pytesseract.image_to_string(img, lang=self.lang)
        with _TESSERACT_CMD_LOCK:
            previous = pytesseract.pytesseract.tesseract_cmd
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
            try:
                return pytesseract.image_to_string(img, lang=self.lang)
            finally:
                pytesseract.pytesseract.tesseract_cmd = previous

    async def recognize(self, image: bytes, on_progress: Optional[ProgressCallback] = None) -> str:
        report = ProgressReporter(on_progress)
        report(0)
        # Decoding, resizing and the Tesseract subprocess all block
        img = await asyncio.to_thread(self.preprocess, image)
        report(20)
        text = await asyncio.to_thread(self.image_to_string, img)
        report(100)
        return text


async def extract_from_screenshot(
    image: bytes,
    engine: OcrEngine,
    on_progress: Optional[ProgressCallback] = None,
    symbols: KnownSymbolSet = DEFAULT_SYMBOLS,
) -> ExtractionResult:
    """
    Runs OCR on the screenshot, then parses the recognized text.
    Raises ScreenshotExtractionError if OCR fails; parsing itself never fails.
    """
    log_event("SCREENSHOT_RECEIVED", {"bytes": len(image)})
    try:
        raw_text = await engine.recognize(image, on_progress)
    except Exception as e:
        log_event("OCR_FAILED", {"error": repr(e)})
        raise ScreenshotExtractionError(OCR_FAILED_MESSAGE) from e

    log_ocr_text(raw_text)
    result = parse_screenshot_text(raw_text, symbols)
    log_extraction(result.present_fields())
    return result
