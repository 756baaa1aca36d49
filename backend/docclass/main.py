import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.settings import get_settings
from .db import create_tables
from .routers import categories, criteria, documents

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="Document Classifier API",
    description="Weighted pattern-matching document classification service",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(categories.router)
app.include_router(criteria.router)
app.include_router(documents.router)


@app.on_event("startup")
def ensure_tables():
    create_tables()

@app.get("/health")
async def health_check():
    return {"status": "healthy", "message": "Document Classifier API is running"}

@app.get("/")
async def root():
    return {"message": "Welcome to the Document Classifier API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("docclass.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
