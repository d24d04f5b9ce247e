"""Tests for frame sampling."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from brandmotion.video.sampler import PlaywrightFrameSampler, frame_count

pytestmark = pytest.mark.asyncio


def _mock_playwright() -> tuple[MagicMock, MagicMock, MagicMock]:
    """async_playwright() context manager yielding a fake browser and page."""
    page = MagicMock()
    page.set_content = AsyncMock()
    page.evaluate = AsyncMock(return_value=3)
    page.screenshot = AsyncMock()

    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=playwright)
    manager.__aexit__ = AsyncMock(return_value=False)
    return manager, browser, page


class TestFrameCount:
    async def test_rounds_up(self):
        assert frame_count(1.01, 30) == 31
        assert frame_count(2.0, 24) == 48

    async def test_zero_duration(self):
        assert frame_count(0, 30) == 0


class TestPlaywrightFrameSampler:
    async def test_seeks_every_frame_and_screenshots(self, tmp_path: Path):
        manager, browser, page = _mock_playwright()
        progress: list[int] = []

        async def on_progress(percent: int) -> None:
            progress.append(percent)

        with patch("brandmotion.video.sampler.async_playwright", return_value=manager):
            result = await PlaywrightFrameSampler().sample(
                "<html></html>",
                output_dir=tmp_path / "frames",
                fps=10,
                duration_seconds=0.4,
                width=1080,
                height=1920,
                on_progress=on_progress,
            )

        assert result.frame_count == 4
        assert result.frame_pattern == str(tmp_path / "frames" / "frame_%05d.png")
        browser.new_page.assert_awaited_once()
        assert browser.new_page.call_args.kwargs["viewport"] == {"width": 1080, "height": 1920}

        seek_times = [c.args[1] for c in page.evaluate.await_args_list if len(c.args) == 2]
        assert seek_times == [0.0, 100.0, 200.0, 300.0]

        paths = [c.kwargs["path"] for c in page.screenshot.await_args_list]
        assert paths[0].endswith("frame_00000.png")
        assert paths[-1].endswith("frame_00003.png")
        assert progress == [25, 50, 75, 100]
        browser.close.assert_awaited_once()

    async def test_browser_closed_on_failure(self, tmp_path: Path):
        manager, browser, page = _mock_playwright()
        page.set_content.side_effect = TimeoutError("Timeout 30000ms exceeded")

        with patch("brandmotion.video.sampler.async_playwright", return_value=manager):
            with pytest.raises(TimeoutError, match="Timeout"):
                await PlaywrightFrameSampler().sample(
                    "<html></html>",
                    output_dir=tmp_path,
                    fps=30,
                    duration_seconds=1,
                    width=1920,
                    height=1080,
                )

        browser.close.assert_awaited_once()
