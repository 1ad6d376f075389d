from fastapi import APIRouter, Request

from templating import render

router = APIRouter()


@router.get("/")
def home(request: Request):
    """Home page."""
    return render(request, "index", {"title": "Express"})
