"""Uploads API — admin image upload and a public image proxy.

Learn: The proxy lets the mobile/web client load remote images that
would otherwise be blocked by CORS. The upstream body is streamed
through chunk by chunk; the httpx client and response are closed in a
background task once the last chunk has been sent.
"""

from typing import Optional
from urllib.parse import urlparse

import httpx
import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from fastfood.auth.dependencies import require_admin
from fastfood.config import settings
from fastfood.services.image_store import ImageStore, ImageUploadError, get_image_store

logger = structlog.get_logger()

router = APIRouter()

_PROXY_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


# ─── Upload ─────────────────────────────────────────────


@router.post("/upload/image", dependencies=[Depends(require_admin)])
async def upload_image(
    image: Optional[UploadFile] = File(None),
    store: ImageStore = Depends(get_image_store),
):
    """Upload an image to Cloudinary → {"image_url": ...}."""
    content = await image.read() if image else b""
    if not content:
        raise HTTPException(status_code=400, detail="No image file provided")

    try:
        url = await store.upload(
            content,
            image.content_type or "application/octet-stream",
            folder=settings.cloudinary_folder,
        )
    except ImageUploadError as e:
        raise HTTPException(status_code=502, detail=f"Image upload failed: {e}")
    return {"image_url": url}


# ─── Proxy ──────────────────────────────────────────────


def get_proxy_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.image_proxy_timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": _PROXY_USER_AGENT},
    )


async def _close(response: Optional[httpx.Response], client: httpx.AsyncClient) -> None:
    if response is not None:
        await response.aclose()
    await client.aclose()


@router.get("/image-proxy")
async def image_proxy(
    url: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_proxy_client),
):
    """Fetch a remote image and stream it back with its content type."""
    if not url:
        await client.aclose()
        raise HTTPException(status_code=400, detail="Image URL is required")
    if urlparse(url).scheme not in ("http", "https"):
        await client.aclose()
        raise HTTPException(status_code=400, detail="Only http(s) URLs can be proxied")

    upstream = None
    try:
        upstream = await client.send(client.build_request("GET", url), stream=True)
        upstream.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("image_proxy.failed", url=url, error=str(e))
        await _close(upstream, client)
        raise HTTPException(status_code=502, detail="Failed to fetch image")

    headers = {}
    if "content-length" in upstream.headers and "content-encoding" not in upstream.headers:
        headers["Content-Length"] = upstream.headers["content-length"]

    logger.debug("image_proxy.streaming", url=url)
    return StreamingResponse(
        upstream.aiter_bytes(),
        media_type=upstream.headers.get("content-type", "application/octet-stream"),
        headers=headers,
        background=BackgroundTask(_close, upstream, client),
    )
