import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

import config
from rotation.router import router as rotation_router

logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s"
)

BASE_DIR = Path(__file__).resolve().parent

app = FastAPI(title=config.APP_TITLE)
app.mount("/static", StaticFiles(directory=BASE_DIR / "rotation" / "static"), name="static")
app.include_router(rotation_router)
