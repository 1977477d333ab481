from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter(tags = ["site"])

@router.get("/")
async def redirect_to_docs():
    return RedirectResponse(url="/docs")
