from __future__ import annotations

import logging

from flask import Flask

from ..admin.controller import admin_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _download(fmt: str):
        payload, exporter = container.report_service.export(fmt)
        filename = container.report_service.filename(fmt)
        logger.info("report exported as %s (%d bytes)", filename, len(payload))
        return app.response_class(
            payload,
            mimetype=exporter.media_type,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/report.csv", methods=["GET"], endpoint="report_csv")
    @admin_required
    def report_csv():
        return _download("csv")

    @app.route("/api/report.pdf", methods=["GET"], endpoint="report_pdf")
    @admin_required
    def report_pdf():
        return _download("pdf")
