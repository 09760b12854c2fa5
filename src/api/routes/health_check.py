from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    return {"status": "ok", "environment": request.app.state.config.ENVIRONMENT}
