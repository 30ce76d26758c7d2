#!/usr/bin/env python3
"""Run script for taskstreaks."""

import os
import logging

import uvicorn
from dotenv import load_dotenv

load_dotenv()

if __name__ == "__main__":
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "taskstreaks.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "False").lower() == "true",
        log_level=log_level.lower(),
    )
