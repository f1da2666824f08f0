"""
School Management API: FastAPI app, startup/shutdown of the store pool and the
uvicorn entry point (`school-locator-api`, port from PORT, default 3000).
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import db, errors, log, settings
from schools import router as schools_router

settings.load_env()
log.configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # The pool lives for the whole process; handlers borrow one connection per statement.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="School Management API", lifespan=lifespan)

# Browser clients on the origins in CORS_ALLOW_ORIGINS may call the API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.install_error_handlers(app)

app.include_router(schools_router.router, tags=["schools"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "Welcome to the School Management API!"}


def run() -> None:
    uvicorn.run(app, host=settings.host(), port=settings.port())


if __name__ == "__main__":
    run()
