import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config import CORS_ORIGINS, PORT
from routers import files, panel, pdf, preview

logger = logging.getLogger(__name__)

app = FastAPI(title="PDF PowerTools", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(files.router, prefix="/api")
app.include_router(pdf.router, prefix="/api")
app.include_router(panel.router, prefix="/api")
app.include_router(preview.router, prefix="/api")

# Serve the panel UI
frontend_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "frontend")
if os.path.exists(frontend_dir):
    app.mount("/", StaticFiles(directory=frontend_dir, html=True), name="static")


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting PDF PowerTools on port {PORT}")
    uvicorn.run(app, host="127.0.0.1", port=PORT)
