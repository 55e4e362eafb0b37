from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from fastapi.responses import RedirectResponse, Response

from ..core.shortener import MIN_CODE_LENGTH
from ..errors import DuplicateKeyError
from ..schemas.link import LinkCreate, LinkResponse
from ..services.links import LinkService
from ..utils.validators import validate_link_create

router = APIRouter()


def get_link_service(request: Request) -> LinkService:
    return request.app.state.service


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid input or code already in use"}},
)
def create_link(
    link_data: LinkCreate,
    service: LinkService = Depends(get_link_service)
):
    """
    Create a short link.

    A random code is generated when none is given.
    """
    result = validate_link_create(link_data)
    if not result.ok:
        raise HTTPException(status_code=400, detail=result.message)

    try:
        return service.create_link(link_data)
    except DuplicateKeyError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/links", response_model=List[LinkResponse])
def list_links(service: LinkService = Depends(get_link_service)):
    """Get all links, newest first"""
    return service.list_links()


@router.delete(
    "/links/{link_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Link not found"}},
)
def delete_link(
    link_id: int,
    service: LinkService = Depends(get_link_service)
):
    """Delete a link permanently"""
    if not service.delete_link(link_id):
        raise HTTPException(status_code=404, detail="Link not found")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


def redirect_to_url(
    short_code: str = Path(..., min_length=MIN_CODE_LENGTH),
    service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the original URL from short code.

    Counts the click before redirecting.
    """
    link = service.resolve_link(short_code)

    if link is None:
        raise HTTPException(status_code=404, detail="Link not found")

    # 302 so every visit comes back through here and gets counted
    response = RedirectResponse(url=link.original_url, status_code=302)
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate, max-age=0"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"

    return response
