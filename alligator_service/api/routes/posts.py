"""
Post routes
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ...application.services import PostService
from ...dependencies import get_current_user_id, get_post_service
from ...schemas import MessageResponse, PostResponse


router = APIRouter(tags=["Posts"])


@router.post("/post", response_model=MessageResponse)
async def create_post(
    content: Optional[str] = Form(None),
    video: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    """
    Create a post

    Multipart form:
    - **content**: Post text
    - **image**: Optional image file, served afterwards under /images
    - **video**: Optional video reference (free text)
    """
    has_image = image is not None and bool(image.filename)
    await post_service.create_post(
        author_id=user_id,
        content=content,
        image_file=image.file if has_image else None,
        image_filename=image.filename if has_image else None,
        video=video
    )
    return MessageResponse(message="Post created")


@router.get("/posts", response_model=List[PostResponse])
async def get_posts(
    user_id: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    """Get every post with its author expanded"""
    posts = await post_service.list_posts()
    return [PostResponse.from_domain(item) for item in posts]
