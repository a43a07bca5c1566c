"""
FastAPI Application Entry Point

Philosophy Q&A API: multi-source paper retrieval + answer synthesis
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from philsearch.core.config import settings
from philsearch.core.logging import setup_logging
from philsearch.api.ask import router as ask_router

setup_logging(settings.log_level)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Answers philosophical questions from papers retrieved across academic APIs",
    version="1.0.0"
)

app.include_router(ask_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"]
)


@app.get("/")
async def health_check():
    """Root endpoint to verify the server is running."""
    return {
        "status": "active",
        "project": settings.PROJECT_NAME,
        "version": "1.0.0",
        "sources": settings.ENABLED_SOURCES,
        "synthesis": {
            "model": settings.LLM_MODEL,
            "configured": settings.OPENAI_API_KEY is not None
        },
        "endpoints": {
            "ask": "/api/ask",
            "search": "/api/search",
            "detect_subfield": "/api/subfields/detect"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
