from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel

from church_admin.core.auth import get_auth_context
from church_admin.services.storage import save_image

# Any signed-in user may upload (get_auth_context rejects missing tokens in jwt mode).
router = APIRouter(prefix="/common", tags=["uploads"], dependencies=[Depends(get_auth_context)])


class UploadResponse(BaseModel):
    url: str


@router.post("/upload", response_model=UploadResponse, status_code=201)
def upload_image(image: UploadFile = File(...)):
    return UploadResponse(url=save_image(image))
