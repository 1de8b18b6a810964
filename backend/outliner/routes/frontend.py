"""
Outliner Backend — Front-end Route
====================================

What:  Serves the single-page front-end entry file at GET /.
How:   Returns public/index.html from the configured public directory. Other
       files in that directory are served by the StaticFiles mount in main.py.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

router = APIRouter(tags=["Frontend"])


@router.get("/", include_in_schema=False)
async def index(request: Request) -> FileResponse:
    public_dir = Path(request.app.state.settings.public_dir)
    return FileResponse(path=str(public_dir / "index.html"), media_type="text/html")
