from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

VIEWS_DIR = Path(__file__).resolve().parent / "views"
PUBLIC_DIR = Path(__file__).resolve().parent / "public"

templates = Jinja2Templates(directory=str(VIEWS_DIR))


def render(request: Request, view: str, context: Optional[Dict[str, Any]] = None, status_code: int = 200):
    """Render ``views/<view>.html`` with ``context``."""
    return templates.TemplateResponse(request, f"{view}.html", context or {}, status_code=status_code)
