from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["site"])


@router.get("/", response_class=PlainTextResponse)
def home() -> str:
    return "Home Page"


@router.get("/about", response_class=PlainTextResponse)
def about() -> str:
    return "About Page"
