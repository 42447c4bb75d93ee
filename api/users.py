import logging
import shutil
import time
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from adapters.base import AdapterError, DatabaseAdapter
from api.deps import get_config, get_db
from api.routes import MISSING_FIELDS_MESSAGE
from api.schemas import MessageResponse, UserListResponse, UserResponse
from catalog.users import create_user, delete_user, get_user, list_users, update_user
from utils.config import AppConfig

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


def upload_filename(original: str) -> str:
    """Namespace an uploaded file by upload time; directory parts of the client name are dropped."""
    return f"{int(time.time() * 1000)}-{Path(original).name}"


def _write_upload(upload_dir: Path, upload: UploadFile) -> str:
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = upload_filename(upload.filename)
    with (upload_dir / filename).open("wb") as out:
        shutil.copyfileobj(upload.file, out)
    return filename


def _discard_upload(upload_dir: Path, filename: Optional[str]) -> None:
    if not filename:
        return
    (upload_dir / Path(filename).name).unlink(missing_ok=True)


@router.post("/api/users", response_model=UserResponse, response_model_exclude_none=True, status_code=201)
@router.post(
    "/api/register",
    response_model=UserResponse,
    response_model_exclude_none=True,
    status_code=201,
    include_in_schema=False,
)
async def register_user(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    profilePic: Optional[UploadFile] = File(None),
    db: DatabaseAdapter = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> UserResponse:
    if _blank(name) or _blank(email) or _blank(phone) or not _has_file(profilePic):
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)

    upload_dir = Path(config.upload_dir)
    filename = await run_in_threadpool(_write_upload, upload_dir, profilePic)
    try:
        user_id = await create_user(db, name, email, phone, filename)
    except AdapterError as exc:
        logger.exception("Registration error")
        await run_in_threadpool(_discard_upload, upload_dir, filename)
        raise HTTPException(status_code=500, detail="Registration failed") from exc

    return UserResponse(
        message="User registered successfully!",
        data={"id": user_id, "name": name, "email": email, "phone": phone, "profilePic": filename},
    )


@router.get("/api/users", response_model=UserListResponse)
async def get_users(db: DatabaseAdapter = Depends(get_db)) -> UserListResponse:
    try:
        users = await list_users(db)
    except AdapterError as exc:
        logger.exception("Fetch error")
        raise HTTPException(status_code=500, detail="Failed to fetch users") from exc
    return UserListResponse(data=users, count=len(users))


@router.get("/api/users/{user_id}", response_model=UserResponse)
async def get_user_by_id(user_id: int, db: DatabaseAdapter = Depends(get_db)) -> UserResponse:
    try:
        user = await get_user(db, user_id)
    except AdapterError as exc:
        logger.exception("Fetch user error")
        raise HTTPException(status_code=500, detail="Failed to fetch user") from exc
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse(data=user)


@router.put("/api/users/{user_id}", response_model=MessageResponse)
async def edit_user(
    user_id: int,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    profilePic: Optional[UploadFile] = File(None),
    db: DatabaseAdapter = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> MessageResponse:
    if _blank(name) or _blank(email) or _blank(phone):
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)

    upload_dir = Path(config.upload_dir)
    filename = None
    if _has_file(profilePic):
        filename = await run_in_threadpool(_write_upload, upload_dir, profilePic)

    previous = None
    try:
        if filename:
            previous = await get_user(db, user_id)
        updated = await update_user(db, user_id, name, email, phone, profile_pic=filename)
    except AdapterError as exc:
        logger.exception("Update error")
        if filename:
            await run_in_threadpool(_discard_upload, upload_dir, filename)
        raise HTTPException(status_code=500, detail="Update failed") from exc

    if not updated:
        if filename:
            await run_in_threadpool(_discard_upload, upload_dir, filename)
        raise HTTPException(status_code=404, detail="User not found")
    if previous and previous["profilePic"] != filename:
        await run_in_threadpool(_discard_upload, upload_dir, previous["profilePic"])
    return MessageResponse(success=True, message="User updated successfully!")


@router.delete("/api/users/{user_id}", response_model=MessageResponse)
async def remove_user(
    user_id: int,
    db: DatabaseAdapter = Depends(get_db),
    config: AppConfig = Depends(get_config),
) -> MessageResponse:
    try:
        user = await get_user(db, user_id)
        deleted = await delete_user(db, user_id)
    except AdapterError as exc:
        logger.exception("Delete error")
        raise HTTPException(status_code=500, detail="Delete failed") from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
    if user:
        await run_in_threadpool(_discard_upload, Path(config.upload_dir), user["profilePic"])
    return MessageResponse(success=True, message="User deleted successfully!")
