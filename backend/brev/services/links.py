"""Business logic for short links."""

import logging
from typing import List, Optional

from fastapi.responses import Response

from ..core.shortener import generate_short_code
from ..models import Link
from ..schemas.link import LinkCreate
from ..store import LinkStore
from .export import ExportTarget, LocalDownload, render_links_csv, report_filename


class LinkService:
    """Create, resolve, list, delete and export short links."""

    def __init__(
        self,
        store: LinkStore,
        export_target: Optional[ExportTarget] = None,
        code_length: int = 6,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.export_target = export_target or LocalDownload()
        self.code_length = code_length
        self.logger = logger or logging.getLogger(__name__)

    def create_link(self, link_data: LinkCreate) -> Link:
        """Insert a link, generating a code when none was supplied.

        A generated code that collides is not retried; the store raises
        DuplicateKeyError just as it does for a taken custom code.
        """
        code = link_data.code or generate_short_code(self.code_length)
        link = self.store.insert_link(code, link_data.url)
        self.logger.info("Created link %s -> %s", link.code, link.original_url)
        return link

    def resolve_link(self, code: str) -> Optional[Link]:
        """Look up a code and count the visit, None when unknown"""
        link = self.store.increment_clicks(code)
        if link is None:
            self.logger.warning("Short code not found: %s", code)
        return link

    def list_links(self) -> List[Link]:
        return self.store.list_links()

    def delete_link(self, link_id: int) -> bool:
        deleted = self.store.delete_link(link_id)
        if deleted:
            self.logger.info("Deleted link %d", link_id)
        return deleted

    def export_report(self) -> Response:
        links = self.store.list_links()
        filename = report_filename()
        response = self.export_target.deliver(render_links_csv(links), filename)
        self.logger.info("Exported %d links as %s", len(links), filename)
        return response

    def health_check(self) -> bool:
        return self.store.ping()
