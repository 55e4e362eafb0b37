from fastapi import APIRouter, Depends

from ..schemas.link import ExportResponse
from ..services.links import LinkService
from .links import get_link_service

router = APIRouter()


@router.get(
    "/metrics",
    responses={
        200: {
            "description": "CSV report, or a temporary download URL when exporting to S3",
            "content": {
                "text/csv": {},
                "application/json": {"schema": ExportResponse.model_json_schema(by_alias=True)},
            },
        },
        500: {"description": "Report could not be delivered"},
    },
)
def export_metrics(service: LinkService = Depends(get_link_service)):
    """Export every link with its click count"""
    return service.export_report()
