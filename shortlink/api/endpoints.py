"""
FastAPI Endpoints for URL Shortener Service

This module defines all HTTP endpoints with minimal logic.
Endpoints only handle:
- Buffering and parsing request bodies
- Error handling and HTTP responses
- Delegating to service layer

Route order matters: the catch-all lookup is registered last so the
landing page, stylesheet and /shorten are matched first. Any method not
registered for a matching path is answered with 405 by the router.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import ValidationError

from shortlink.api.schemas import ShortenRequest, ShortenResponse
from shortlink.core.exceptions import (
    InvalidRequestBodyError,
    MissingURLError,
    ShortCodeExistsError,
    StoreError,
)
from shortlink.db.interface import LinkStore
from shortlink.db.session import get_link_store
from shortlink.services.asset_service import AssetService
from shortlink.services.redirect_service import RedirectService
from shortlink.services.url_service import URLShorteningService

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal Server Error"
SERVER_ERROR = "500 Internal Server Error"
NOT_FOUND = "404 Not Found"


def parse_shorten_request(body: bytes) -> ShortenRequest:
    """
    Parse a raw /shorten body.
    
    Raises:
        InvalidRequestBodyError: If the body is not a JSON object of the expected shape
    """
    try:
        return ShortenRequest.model_validate_json(body)
    except ValidationError as e:
        raise InvalidRequestBodyError(str(e), original_error=e) from e


def build_short_url(request: Request, short_code: str) -> str:
    """Absolute short URL, from BASE_URL or the request's own base URL."""
    base_url = request.app.state.settings.BASE_URL or str(request.base_url)
    return f"{base_url.rstrip('/')}/{short_code}"


def redirect_response(target_url: str) -> Response:
    """
    302 with the stored target as the Location header, byte for byte.

    Targets that cannot be sent as a latin-1 header fall back to
    RedirectResponse, which percent-quotes them.
    """
    try:
        return Response(
            status_code=status.HTTP_302_FOUND,
            headers={"Location": target_url}
        )
    except UnicodeEncodeError:
        return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)


async def serve_asset(request: Request, name: str) -> Response:
    assets: AssetService = request.app.state.asset_service
    try:
        content = await assets.read(name)
    except OSError as e:
        logger.error(f"Error reading static asset '{name}': {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=SERVER_ERROR
        )
    return Response(content=content, media_type=assets.media_type(name))


@router.get("/", summary="Landing page")
async def landing_page(request: Request) -> Response:
    return await serve_asset(request, "index")


@router.get("/style.css", summary="Landing page stylesheet")
async def stylesheet(request: Request) -> Response:
    return await serve_asset(request, "stylesheet")


@router.post(
    "/shorten",
    summary="Create a short URL",
    description="Takes a long URL and an optional custom code and stores the mapping"
)
async def create_short_url(
    request: Request,
    store: LinkStore = Depends(get_link_store)
) -> JSONResponse:
    """
    Create a new short URL from a long URL.
    
    Returns:
        JSON {"success": true, "shortUrl": "..."}
    
    Raises:
        HTTPException 400: If url is missing or the short code is taken
        HTTPException 500: If the body is malformed or storage fails
    """
    # Wait for the complete body before doing anything else
    body = await request.body()
    
    try:
        payload = parse_shorten_request(body)
        
        url_service = URLShorteningService(
            store,
            short_code_bytes=request.app.state.settings.SHORT_CODE_BYTES
        )
        short_code, _ = await url_service.create_short_url(
            payload.url,
            payload.short_code
        )
    
    except (MissingURLError, ShortCodeExistsError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except InvalidRequestBodyError as e:
        logger.error(f"POST /shorten failed: {e.reason}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR
        )
    except Exception as e:
        logger.error(f"POST /shorten failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR
        )
    
    response = ShortenResponse(short_url=build_short_url(request, short_code))
    return JSONResponse(content=response.model_dump(by_alias=True))


@router.get(
    "/{short_code:path}",
    status_code=status.HTTP_302_FOUND,
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL"
)
async def redirect_to_url(
    short_code: str,
    store: LinkStore = Depends(get_link_store)
) -> Response:
    """
    Redirect to the original URL for a given short code.
    
    Args:
        short_code: Request path without its leading '/', matched exactly
    
    Returns:
        HTTP 302 response to original URL
    
    Raises:
        HTTPException 404: If short code not found
        HTTPException 500: If the link store cannot be read
    """
    redirect_service = RedirectService(store)
    try:
        original_url = await redirect_service.get_redirect_url(short_code)
    except StoreError as e:
        logger.error(f"Lookup of '{short_code}' failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=SERVER_ERROR
        )
    except Exception as e:
        logger.error(f"Lookup of '{short_code}' failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=SERVER_ERROR
        )
    
    if original_url is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=NOT_FOUND
        )
    
    return redirect_response(original_url)
