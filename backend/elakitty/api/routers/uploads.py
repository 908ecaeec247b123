# backend/elakitty/api/routers/uploads.py
from fastapi import APIRouter, Depends, File, UploadFile

from elakitty.api.deps import get_user
from elakitty.errors import ValidationError
from elakitty.services.access.role_gate import Action, authorize
from elakitty.services.access.viewer import Viewer
from elakitty.services.storage.blobs import (
    BUCKETS,
    SANCTUARY_LOGOS,
    BlobStore,
    get_blob_store,
)

router = APIRouter()


@router.post("/{bucket}", status_code=201)
def upload(
    bucket: str,
    file: UploadFile = File(...),
    viewer: Viewer = Depends(get_user),
    store: BlobStore = Depends(get_blob_store),
):
    if bucket not in BUCKETS:
        raise ValidationError(f"unknown bucket: {bucket}")
    if bucket == SANCTUARY_LOGOS:
        authorize(viewer, Action.UPLOAD_LOGO)
    data = file.file.read()
    url = store.upload(bucket, file.filename or "upload", data)
    return {"url": url}
