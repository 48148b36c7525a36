"""HTTP API exposing batch header extraction."""

import logging
from typing import Any

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from headerscope import __version__
from headerscope.config import Settings, get_settings
from headerscope.core.errors import (
    AuthenticationError,
    ConfigurationError,
    ReportExportError,
)
from headerscope.services.excel_exporter import ExcelExporter
from headerscope.services.pipeline import HeaderExtractionPipeline
from headerscope.utils.logging import setup_logging

logger = logging.getLogger(__name__)

EXAMPLE_IFLOW = "IDM_AM_ContractTable_To_SAPS4_IDD250128_EIC_IBProcessing"


class ExtractRequest(BaseModel):
    iflows: list[str] | None = None


def get_pipeline(settings: Settings = Depends(get_settings)) -> HeaderExtractionPipeline:
    return HeaderExtractionPipeline(settings)


def get_exporter(settings: Settings = Depends(get_settings)) -> ExcelExporter:
    return ExcelExporter(settings.output_file)


app = FastAPI(title="Headerscope", version=__version__)


@app.get("/")
def health() -> dict[str, str]:
    return {"status": "ok", "message": "Headerscope API is running."}


@app.post("/extract")
def extract(
    request: ExtractRequest,
    pipeline: HeaderExtractionPipeline = Depends(get_pipeline),
    exporter: ExcelExporter = Depends(get_exporter),
) -> JSONResponse:
    """Download the requested artifacts, extract headers and export them."""
    if not request.iflows:
        return JSONResponse(
            status_code=400,
            content={
                "status": "error",
                "message": 'Request body must contain a non-empty "iflows" array.',
                "example": {"iflows": [EXAMPLE_IFLOW]},
            },
        )

    logger.info("POST /extract - %d iflow(s) requested", len(request.iflows))

    try:
        batch = pipeline.run_remote(request.iflows)

        file_path = None
        if batch.results:
            file_path = str(exporter.export(batch.results))
        else:
            logger.warning("No data to export - all iflows failed.")
    except (AuthenticationError, ConfigurationError, ReportExportError) as e:
        logger.error("Fatal error: %s", e)
        return JSONResponse(status_code=500, content={"status": "error", "message": str(e)})

    body: dict[str, Any] = {
        "status": "completed",
        "file": file_path,
        "summary": {
            "total": len(request.iflows),
            "processed": batch.processed,
            "failed": batch.failed,
        },
    }
    if batch.failures:
        body["failed"] = [
            {"iflow": failure.artifact_name, "error": failure.error}
            for failure in batch.failures
        ]
    return JSONResponse(content=body)


def main() -> None:
    """Run the API with uvicorn."""
    settings = get_settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
