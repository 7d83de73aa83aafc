from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def root():
    with open(STATIC_DIR / "player.html", "r", encoding="utf-8") as f:
        return f.read()


@router.get("/admin", response_class=HTMLResponse)
async def admin_page():
    with open(STATIC_DIR / "admin.html", "r", encoding="utf-8") as f:
        return f.read()
