"""Frame sampling: turn a capture document into an ordered PNG sequence."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable

from playwright.async_api import async_playwright

from brandmotion.core.logging import get_logger
from brandmotion.video.constants import FRAME_FILENAME_PATTERN
from brandmotion.video.timeline import round_half_up

logger = get_logger(__name__)

ProgressCallback = Callable[[int], Awaitable[None]]

CHROMIUM_ARGS = ["--no-sandbox", "--disable-dev-shm-usage", "--font-render-hinting=none"]

# Freeze the document clock so nothing advances between screenshots
_PAUSE_ALL_SCRIPT = """() => {
  document.getAnimations().forEach((animation) => animation.pause());
  return document.getAnimations().length;
}"""

_SEEK_SCRIPT = """(ms) => {
  document.getAnimations().forEach((animation) => {
    animation.currentTime = ms;
  });
}"""


def frame_count(duration_seconds: float, fps: int) -> int:
    """Frames needed to cover a duration: one per 1/fps seconds, rounded up."""
    if duration_seconds <= 0 or fps <= 0:
        return 0
    return math.ceil(duration_seconds * fps)


@dataclass
class SampleResult:
    """Ordered still images written by a sampler."""

    frame_pattern: str  # printf-style, e.g. /tmp/job/frame_%05d.png
    frame_count: int
    fps: int
    width: int
    height: int


class FrameSampler(ABC):
    """Abstract base class for frame samplers."""

    @abstractmethod
    async def sample(
        self,
        html: str,
        *,
        output_dir: Path,
        fps: int,
        duration_seconds: float,
        width: int,
        height: int,
        on_progress: ProgressCallback | None = None,
    ) -> SampleResult:
        """
        Capture one frame per 1/fps seconds of document time.

        Args:
            html: Capture document (no scripts).
            output_dir: Directory for frame_%05d.png files.
            fps: Frames per second.
            duration_seconds: Length to cover.
            width: Viewport width in pixels.
            height: Viewport height in pixels.
            on_progress: Awaited with percent complete (0-100) after each frame.

        Returns:
            SampleResult describing the written sequence.
        """
        ...


class PlaywrightFrameSampler(FrameSampler):
    """Headless Chromium sampler: pause every animation, seek, screenshot."""

    def __init__(self, headless: bool = True, timeout_ms: int = 30000) -> None:
        self.headless = headless
        self.timeout_ms = timeout_ms

    async def sample(
        self,
        html: str,
        *,
        output_dir: Path,
        fps: int,
        duration_seconds: float,
        width: int,
        height: int,
        on_progress: ProgressCallback | None = None,
    ) -> SampleResult:
        output_dir.mkdir(parents=True, exist_ok=True)
        total_frames = frame_count(duration_seconds, fps)
        log = logger.bind(frames=total_frames, fps=fps, width=width, height=height)
        log.info("frame_sampling_started")

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self.headless, args=CHROMIUM_ARGS)
            try:
                page = await browser.new_page(
                    viewport={"width": width, "height": height},
                    device_scale_factor=1,
                )
                page.set_default_timeout(self.timeout_ms)
                await page.set_content(html, wait_until="networkidle", timeout=self.timeout_ms)
                await page.evaluate("() => document.fonts.ready.then(() => true)")

                animations = await page.evaluate(_PAUSE_ALL_SCRIPT)
                log.bind(animations=animations).debug("animations_paused")

                for index in range(total_frames):
                    await page.evaluate(_SEEK_SCRIPT, index * 1000 / fps)
                    path = output_dir / (FRAME_FILENAME_PATTERN % index)
                    await page.screenshot(path=str(path), type="png")

                    if on_progress is not None:
                        await on_progress(round_half_up((index + 1) / total_frames * 100))
            finally:
                await browser.close()

        log.info("frame_sampling_complete")
        return SampleResult(
            frame_pattern=str(output_dir / FRAME_FILENAME_PATTERN),
            frame_count=total_frames,
            fps=fps,
            width=width,
            height=height,
        )
