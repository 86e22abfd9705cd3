# file: main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, File, HTTPException, UploadFile
from dotenv import load_dotenv

load_dotenv()

from config import load_settings
from db_setup import setup_database
from event_logger import log_event, log_extraction
from form_filler import apply_extracted_data, default_trade_form
from ocr_engine import ScreenshotExtractionError, TesseractOcrEngine, extract_from_screenshot
from screenshot_parser import parse_screenshot_text

USER_FACING_OCR_ERROR = "Failed to extract data from screenshot. Try a clearer image."

settings = load_settings()
known_symbols = settings.known_symbols()
ocr_engine = TesseractOcrEngine(
    lang=settings.ocr_lang,
    tesseract_cmd=settings.tesseract_cmd,
    upscale_factor=settings.ocr_upscale_factor,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_database()
    log_event("APP_STARTUP", {"symbols": len(known_symbols), "ocr_lang": settings.ocr_lang})

    yield

    log_event("APP_SHUTDOWN", {"message": "Extractor stopped."})

app = FastAPI(title="MT5 Screenshot Extractor", version="1.0.0", lifespan=lifespan)


@app.get("/ping")
async def ping():
    return {"status": "ok"}


@app.post("/parse_text")
async def parse_text(raw_text: str):
    # No-match is a normal outcome, so this never returns 4xx for an empty result.
    result = parse_screenshot_text(raw_text, known_symbols)
    log_extraction(result.present_fields())
    return result.model_dump()


@app.post("/extract")
async def extract(file: UploadFile = File(...)):
    image = await file.read()
    if not image:
        raise HTTPException(status_code=400, detail="Uploaded screenshot is empty.")

    try:
        result = await extract_from_screenshot(image, ocr_engine, symbols=known_symbols)
    except ScreenshotExtractionError:
        raise HTTPException(status_code=422, detail=USER_FACING_OCR_ERROR)

    form = apply_extracted_data(default_trade_form(), result)
    return {"extracted": result.model_dump(), "form": form.model_dump()}
