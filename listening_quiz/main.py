from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from listening_quiz.api.routes import admin, play, root
from listening_quiz.api.routes.root import STATIC_DIR
from listening_quiz.core.config import settings
from listening_quiz.core.logging import configure_logging
from listening_quiz.db import init_db
from listening_quiz.services.question_store import QuestionStore
from listening_quiz.services.remote_mirror import RemoteMirror
from listening_quiz.services.runtime import RuntimeController
from listening_quiz.services.storage import DatabaseStorage


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_dir)
    # Ensure media directory exists before serving uploads
    settings.media_root.mkdir(parents=True, exist_ok=True)
    await init_db()

    mirror = RemoteMirror(settings.remote_mirror_url, timeout=settings.remote_timeout)
    store = QuestionStore(DatabaseStorage(), mirror=mirror, key=settings.storage_key)
    runtime = RuntimeController(store, admin_code=settings.admin_code)
    await runtime.start()
    app.state.runtime = runtime
    try:
        yield
    finally:
        await runtime.close()

app = FastAPI(title="Listening Fill-in-the-Blanks", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
app.mount("/media", StaticFiles(directory=settings.media_root, check_dir=False), name="media")

app.include_router(root.router)
app.include_router(play.router)
app.include_router(admin.router)


def run():
    import uvicorn

    uvicorn.run("listening_quiz.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
