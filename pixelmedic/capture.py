"""
Screenshot Capture Module

Captures screenshots of web pages using Playwright so a live page can be
critiqued without saving a file first.
"""

from typing import Optional

from playwright.async_api import async_playwright, TimeoutError as PlaywrightTimeout

from .errors import ImageRejected
from .imaging import MAX_IMAGE_BYTES, encode_image


class ScreenshotCapturer:
    """
    Captures PNG screenshots of web pages with a headless Chromium.

    Example:
        capturer = ScreenshotCapturer(viewport={"width": 1440, "height": 900})
        image = await capturer.capture_data_uri("http://localhost:4200")
    """

    def __init__(self, viewport: Optional[dict] = None):
        """
        Initialize screenshot capturer.

        Args:
            viewport: Viewport dimensions {"width": int, "height": int}
                     Defaults to 1920x1080
        """
        self.viewport = viewport or {"width": 1920, "height": 1080}

    async def capture(
        self,
        url: str,
        selector: Optional[str] = None,
        wait_for: Optional[str] = None,
        full_page: bool = False,
        wait_timeout: int = 10000
    ) -> bytes:
        """
        Capture a screenshot of a web page.

        Args:
            url: Page URL to capture (file:// or http(s)://)
            selector: CSS selector to click before capture (e.g. a tab button)
            wait_for: CSS selector to wait for before capture
            full_page: Capture full scrollable page or the viewport only
            wait_timeout: Milliseconds to wait for navigation and elements

        Returns:
            PNG image bytes

        Raises:
            RuntimeError: If the browser fails to navigate or an element
                          does not appear in time
        """
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                page = await browser.new_page(viewport=self.viewport)
                await page.goto(url, wait_until="networkidle", timeout=wait_timeout)

                if selector:
                    try:
                        await page.click(selector, timeout=wait_timeout)
                    except PlaywrightTimeout as e:
                        raise RuntimeError(f"Failed to find clickable element: {selector}") from e

                if wait_for:
                    try:
                        await page.wait_for_selector(wait_for, timeout=wait_timeout)
                    except PlaywrightTimeout as e:
                        raise RuntimeError(f"Timeout waiting for element: {wait_for}") from e

                # Let late layout and transitions settle
                await page.wait_for_timeout(500)

                return await page.screenshot(full_page=full_page, type="png")
            except PlaywrightTimeout as e:
                raise RuntimeError(f"Screenshot capture timed out: {url}") from e
            finally:
                await browser.close()

    async def capture_data_uri(self, url: str, **kwargs) -> str:
        """Capture a page and return it as a PNG data URI"""
        png = await self.capture(url, **kwargs)
        if len(png) > MAX_IMAGE_BYTES:
            raise ImageRejected("Captured screenshot exceeds 10 MiB, try a smaller viewport")
        return encode_image(png, "image/png")
