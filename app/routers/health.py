from fastapi import APIRouter

router = APIRouter()

@router.get("/health")
def health():
    # Check si l'API est up
    return {"status": "ok"}
