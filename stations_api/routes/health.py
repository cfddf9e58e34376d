from fastapi import APIRouter
from stations_api.logger import CustomLogger

router = APIRouter(tags=["Health"])
console = CustomLogger()

READY_MESSAGE = "STATIONS SERVICE: ready to receive requests"


@router.get("/")
def root():
    return {"message": READY_MESSAGE}


@router.get("/health")
def health():
    console.debug("Health check pinged.")
    return {"status": "ok"}
