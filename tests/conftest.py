"""
Pytest configuration and fixtures for BrandMotion tests.

Provides:
- Fake frame sampler and encoder (no browser or FFmpeg needed)
- An orchestrator wired to an in-memory job store and a temp output dir
- Test client for API testing
- Factories for scenes and export requests
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from brandmotion.config import RenderConfig
from brandmotion.dependencies import get_job_store, get_orchestrator
from brandmotion.jobs.store import InMemoryJobStore
from brandmotion.main import app
from brandmotion.schemas.export import ExportRequest
from brandmotion.schemas.scene import Scene
from brandmotion.video.encoder import Encoder, EncodeRequest
from brandmotion.video.orchestrator import ExportOrchestrator
from brandmotion.video.presets import PresetCatalog, build_catalog
from brandmotion.video.sampler import FrameSampler, ProgressCallback, SampleResult, frame_count


class FakeSampler(FrameSampler):
    """Writes placeholder frame files instead of launching a browser."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict[str, Any]] = []

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
        self.calls.append(
            {
                "html": html,
                "output_dir": output_dir,
                "fps": fps,
                "duration_seconds": duration_seconds,
                "width": width,
                "height": height,
            }
        )
        if self.error:
            raise self.error

        output_dir.mkdir(parents=True, exist_ok=True)
        total = frame_count(duration_seconds, fps)
        for index in range(total):
            (output_dir / f"frame_{index:05d}.png").write_bytes(b"png")
        if on_progress is not None:
            await on_progress(50)
            await on_progress(100)

        return SampleResult(
            frame_pattern=str(output_dir / "frame_%05d.png"),
            frame_count=total,
            fps=fps,
            width=width,
            height=height,
        )


class FakeEncoder(Encoder):
    """Writes a stub video file and records the request."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.requests: list[EncodeRequest] = []

    async def encode(self, request: EncodeRequest) -> Path:
        self.requests.append(request)
        if self.error:
            raise self.error
        request.output_path.parent.mkdir(parents=True, exist_ok=True)
        request.output_path.write_bytes(b"mp4")
        return request.output_path


def make_scene(index: int = 0, **overrides: Any) -> Scene:
    """Create a scene with sensible defaults."""
    data: dict[str, Any] = {
        "id": f"s{index + 1}",
        "headline": f"Headline {index + 1}",
        "subtext": f"Subtext {index + 1}",
        "animation": "slideUp",
        "duration": "medium",
    }
    data.update(overrides)
    return Scene.model_validate(data)


def make_request(scene_count: int = 2, **overrides: Any) -> ExportRequest:
    """Create an export request with ``scene_count`` medium scenes."""
    data: dict[str, Any] = {
        "brandPalette": {"primary": "#0ea5e9", "secondary": "#0f172a", "accent": "#f59e0b"},
        "scenes": [make_scene(i).model_dump(by_alias=True) for i in range(scene_count)],
        "aspectRatio": "16:9",
        "quality": "low",
    }
    data.update(overrides)
    return ExportRequest.model_validate(data)


def export_payload(scene_count: int = 2, **overrides: Any) -> dict[str, Any]:
    """JSON body for POST /api/export."""
    payload: dict[str, Any] = {
        "brandPalette": {"primary": "#0ea5e9", "secondary": "#0f172a", "accent": "#f59e0b"},
        "scenes": [
            {"id": f"s{i + 1}", "headline": f"Headline {i + 1}", "duration": 3}
            for i in range(scene_count)
        ],
        "aspectRatio": "16:9",
        "quality": "low",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def catalog() -> PresetCatalog:
    return build_catalog()


@pytest.fixture
def render_config() -> RenderConfig:
    """Render limits with output retention disabled."""
    return RenderConfig({"output_retention_minutes": 0})


@pytest.fixture
def job_store() -> InMemoryJobStore:
    return InMemoryJobStore()


@pytest.fixture
def sampler() -> FakeSampler:
    return FakeSampler()


@pytest.fixture
def encoder() -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture
def orchestrator(
    tmp_path: Path,
    job_store: InMemoryJobStore,
    sampler: FakeSampler,
    encoder: FakeEncoder,
    catalog: PresetCatalog,
    render_config: RenderConfig,
) -> ExportOrchestrator:
    return ExportOrchestrator(
        store=job_store,
        sampler=sampler,
        encoder=encoder,
        catalog=catalog,
        config=render_config,
        output_dir=tmp_path / "output",
    )


@pytest_asyncio.fixture
async def client(
    orchestrator: ExportOrchestrator,
    job_store: InMemoryJobStore,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with fake export collaborators."""
    from brandmotion.core.rate_limit import limiter

    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_job_store] = lambda: job_store

    # Reset rate limiter storage before each test
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await orchestrator.join()
    app.dependency_overrides.clear()


@pytest.fixture
def scene_factory():
    """Factory for scenes: scene_factory(index, **overrides)."""
    return make_scene


@pytest.fixture
def request_factory():
    """Factory for export requests: request_factory(scene_count, **overrides)."""
    return make_request


@pytest.fixture
def payload_factory():
    """Factory for /api/export JSON bodies: payload_factory(scene_count, **overrides)."""
    return export_payload
