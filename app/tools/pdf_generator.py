# In app/tools/pdf_generator.py
import logging

logger = logging.getLogger(__name__)

PAGE_FORMAT = "A4"
PAGE_MARGIN = "20px"

# Used by the weasyprint engine, which has no page.pdf() options
PAGE_CSS = f"@page {{ size: {PAGE_FORMAT}; margin: {PAGE_MARGIN}; }}"


async def create_pdf_with_chromium(html_content: str, pdf_path: str) -> None:
    """Renders HTML into a PDF file using headless Chromium via Playwright.

    The browser is closed on every exit path; errors propagate to the caller.
    """
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=["--no-sandbox", "--disable-setuid-sandbox"])
        try:
            page = await browser.new_page()
            await page.set_content(html_content, wait_until="networkidle")
            await page.pdf(
                path=pdf_path,
                format=PAGE_FORMAT,
                margin={
                    "top": PAGE_MARGIN,
                    "right": PAGE_MARGIN,
                    "bottom": PAGE_MARGIN,
                    "left": PAGE_MARGIN,
                },
                print_background=True,
                prefer_css_page_size=True,
            )
        finally:
            # close before the driver stops
            try:
                await browser.close()
            except Exception as e_close:
                logger.debug("Error closing Playwright browser: %s", e_close)


def create_pdf(html_content: str, pdf_path: str, css_content: str = PAGE_CSS) -> None:
    """Renders HTML and CSS content into a PDF file using WeasyPrint."""
    from weasyprint import HTML, CSS

    css = CSS(string=css_content)
    html = HTML(string=html_content, base_url='.')
    html.write_pdf(pdf_path, stylesheets=[css])
