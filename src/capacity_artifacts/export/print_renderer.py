# src/capacity_artifacts/export/print_renderer.py
"""
Print conversion boundary.

Hands a finished document to headless Chromium and writes a fixed-size,
background-preserving PDF. The document string is never modified here.
"""

from pathlib import Path
from typing import Optional, Union

from pydantic_settings import BaseSettings, SettingsConfigDict

from capacity_artifacts.exceptions import PrintRenderError
from capacity_artifacts.utils.logger import get_logger

logger = get_logger(__name__)


class PrintSettings(BaseSettings):
    """
    Headless print configuration, loaded from PRINT_* environment variables.
    Page size matches the documents' @page rule.
    """
    model_config = SettingsConfigDict(
        env_file='.env', env_prefix='PRINT_', env_ignore_empty=True, extra='ignore'
    )

    page_width: str = "612px"
    page_height: str = "792px"
    timeout_ms: int = 30000
    browser_executable: Optional[str] = None


def render_pdf(
    document: str,
    output_path: Union[str, Path],
    settings: Optional[PrintSettings] = None,
) -> Path:
    """
    Print `document` to `output_path` and return the resolved path.

    :raises PrintRenderError: if the browser cannot be started or printing fails.
    """
    # Optional dependency: only the print path needs a browser
    from playwright.sync_api import sync_playwright

    settings = settings or PrintSettings()
    output_path = Path(output_path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)

    launch_args = {}
    if settings.browser_executable:
        launch_args["executable_path"] = settings.browser_executable

    try:
        with sync_playwright() as pw:
            browser = pw.chromium.launch(**launch_args)
            try:
                page = browser.new_page()
                page.set_content(document, wait_until="load", timeout=settings.timeout_ms)
                page.pdf(
                    path=str(output_path),
                    width=settings.page_width,
                    height=settings.page_height,
                    print_background=True,
                    margin={"top": "0", "right": "0", "bottom": "0", "left": "0"},
                )
            finally:
                browser.close()
    except Exception as e:
        logger.error("Print conversion failed for %s: %s", output_path, e, exc_info=True)
        raise PrintRenderError(f"Could not print document to {output_path}: {e}") from e

    logger.info("PDF written: %s", output_path)
    return output_path
