import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from video_qa.api.routes.ingest import router as ingest_router
from video_qa.api.routes.query import router as query_router
from video_qa.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Video Q&A API",
    description="Ask questions about YouTube videos from their transcripts",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(query_router)
app.include_router(ingest_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
