"""Export orchestrator - coordinates document synthesis, sampling and encoding."""

import asyncio
import shutil
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from loguru import Logger

from brandmotion.config import AppConfig, RenderConfig
from brandmotion.core.datetime_utils import utc_after
from brandmotion.core.exceptions import ExportRejected, PolicyViolation
from brandmotion.core.logging import get_logger
from brandmotion.jobs.store import JobStore
from brandmotion.schemas.export import ExportRequest
from brandmotion.schemas.job import Job, JobStatus
from brandmotion.video.constants import DEFAULT_AUDIO_VOLUME
from brandmotion.video.document import RenderDocument, synthesize_document
from brandmotion.video.encoder import (
    Encoder,
    EncodeRequest,
    MoviePyEncoder,
    decode_audio_data_url,
)
from brandmotion.video.formats import FormatSpec, QualityPreset, find_format_spec, get_quality_preset
from brandmotion.video.presets import PresetCatalog
from brandmotion.video.sampler import FrameSampler, PlaywrightFrameSampler, SampleResult
from brandmotion.video.serializers import serialize_capture
from brandmotion.video.timeline import MasterTimeline, compute_master_timeline, round_half_up

logger = get_logger(__name__)

# Progress checkpoints (percent)
PROGRESS_DOCUMENT_START = 10
PROGRESS_DOCUMENT_DONE = 20
PROGRESS_SAMPLING_START = 25
PROGRESS_SAMPLING_SPAN = 35  # sampling runs 25 -> 60
PROGRESS_ENCODING_START = 65
PROGRESS_ENCODING_DONE = 90
PROGRESS_COMPLETE = 100


def validate_export_request(request: ExportRequest, config: RenderConfig) -> FormatSpec:
    """
    Intake checks. Nothing is created when these fail.

    Returns:
        Output format for the requested aspect ratio

    Raises:
        ExportRejected: scenes missing, empty or over the cap, or unknown aspect ratio
    """
    if request.scenes is None:
        raise ExportRejected("scenes_missing", "Scenes are required")
    if not request.scenes:
        raise ExportRejected("scenes_empty", "At least one scene is required")
    if len(request.scenes) > config.max_scenes:
        raise ExportRejected(
            "too_many_scenes",
            f"Maximum {config.max_scenes} scenes allowed (got {len(request.scenes)})",
        )

    spec = find_format_spec(request.aspect_ratio)
    if spec is None:
        raise ExportRejected(
            "unsupported_aspect_ratio",
            f"Unsupported aspect ratio: {request.aspect_ratio}",
        )
    return spec


def check_duration(timeline: MasterTimeline, max_duration_ms: int) -> None:
    """Raise PolicyViolation when the sequence is longer than allowed."""
    if timeline.total_duration > max_duration_ms:
        raise PolicyViolation(
            f"Video exceeds {max_duration_ms // 1000} seconds limit "
            f"({timeline.total_duration}ms > {max_duration_ms}ms)"
        )


class ExportOrchestrator:
    """Runs export jobs: validate, queue, then render in a background task."""

    def __init__(
        self,
        store: JobStore,
        sampler: FrameSampler,
        encoder: Encoder,
        catalog: PresetCatalog,
        config: RenderConfig,
        output_dir: Path,
        headline_font: str | None = None,
    ) -> None:
        self.store = store
        self.sampler = sampler
        self.encoder = encoder
        self.catalog = catalog
        self.config = config
        self.videos_dir = output_dir / "videos"
        self.work_dir = output_dir / "temp"
        self.headline_font = headline_font
        self._tasks: set[asyncio.Task[Job]] = set()
        self._expiry_tasks: set[asyncio.Task[None]] = set()

    async def submit(self, request: ExportRequest) -> Job:
        """
        Validate a request, record a pending job and start rendering it.

        Raises:
            ExportRejected: if the request fails intake checks
        """
        validate_export_request(request, self.config)

        job = await self.store.create(Job(id=uuid4().hex, request=request))
        logger.bind(job_id=job.id, scenes=len(request.scenes or [])).info("export_job_created")

        task = asyncio.create_task(self.run(job.id), name=f"export-{job.id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return job

    async def join(self) -> None:
        """Wait for every in-flight job to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def run(self, job_id: str) -> Job:
        """
        Render a queued job to a video file.

        Every exception ends the job as failed with its message; the frame
        directory is always removed.
        """
        job = await self.store.get(job_id)
        if job is None:
            raise KeyError(job_id)

        log = logger.bind(job_id=job_id)
        request = job.request
        frame_dir = self.work_dir / job_id

        try:
            spec = validate_export_request(request, self.config)
            quality = get_quality_preset(request.quality, self.config.quality_overrides)

            document = await self._step_generate_document(job_id, request, log)
            result = await self._step_sample_frames(job_id, document, spec, quality, frame_dir, log)
            audio_path = self._step_decode_audio(request, frame_dir, log)
            output_path = await self._step_encode(
                job_id, request, result, quality, audio_path, log
            )

            job = await self._update(
                job_id,
                JobStatus.COMPLETED,
                PROGRESS_COMPLETE,
                output_path=str(output_path),
                frame_count=result.frame_count,
                duration_seconds=document.total_duration_ms / 1000,
                width=spec.width,
                height=spec.height,
                expires_at=self._expires_at(),
            )
            log.bind(output=str(output_path), frames=result.frame_count).info("export_job_complete")
            self._schedule_expiry(job_id, output_path)

        except Exception as e:
            log.bind(error=str(e)).error("export_job_failed")
            failed = await self.store.update(
                job_id, status=JobStatus.FAILED, error=str(e) or type(e).__name__
            )
            job = failed or job

        finally:
            _remove_frames(frame_dir, log)

        return job

    # -------------------------------------------------------------------------
    # Step Methods
    # -------------------------------------------------------------------------

    async def _step_generate_document(
        self,
        job_id: str,
        request: ExportRequest,
        log: "Logger",
    ) -> RenderDocument:
        """
        Build the timeline and render document.

        Raises:
            PolicyViolation: if the sequence is over the duration ceiling
        """
        await self._update(job_id, JobStatus.GENERATING_DOCUMENT, PROGRESS_DOCUMENT_START)
        scenes = request.scenes or []

        timeline = compute_master_timeline(scenes)
        check_duration(timeline, self.config.max_duration_ms)
        log.bind(duration_ms=timeline.total_duration, scenes=len(scenes)).info("timeline_computed")

        document = synthesize_document(
            timeline,
            scenes,
            request.brand_palette,
            request.aspect_ratio,
            self.catalog,
            headline_font=self.headline_font,
        )
        await self._update(job_id, JobStatus.GENERATING_DOCUMENT, PROGRESS_DOCUMENT_DONE)
        return document

    async def _step_sample_frames(
        self,
        job_id: str,
        document: RenderDocument,
        spec: FormatSpec,
        quality: QualityPreset,
        frame_dir: Path,
        log: "Logger",
    ) -> SampleResult:
        """Capture frames; progress maps 0-100% of frames onto 25-60."""
        await self._update(job_id, JobStatus.SAMPLING_FRAMES, PROGRESS_SAMPLING_START)

        async def on_progress(percent: int) -> None:
            progress = PROGRESS_SAMPLING_START + round_half_up(percent / 100 * PROGRESS_SAMPLING_SPAN)
            await self._update(job_id, JobStatus.SAMPLING_FRAMES, progress)

        duration_seconds = document.total_duration_ms / 1000 + self.config.tail_padding_seconds
        log.bind(fps=quality.fps, duration_seconds=duration_seconds).info("sampling_frames")
        return await self.sampler.sample(
            serialize_capture(document),
            output_dir=frame_dir,
            fps=quality.fps,
            duration_seconds=duration_seconds,
            width=spec.width,
            height=spec.height,
            on_progress=on_progress,
        )

    def _step_decode_audio(
        self,
        request: ExportRequest,
        frame_dir: Path,
        log: "Logger",
    ) -> Path | None:
        """Write the request's audio track next to the frames (skipped if invalid)."""
        if not request.audio or not request.audio.data_url:
            return None

        audio_path = decode_audio_data_url(request.audio.data_url, frame_dir)
        if audio_path is None:
            log.warning("audio_track_skipped")
        return audio_path

    async def _step_encode(
        self,
        job_id: str,
        request: ExportRequest,
        result: SampleResult,
        quality: QualityPreset,
        audio_path: Path | None,
        log: "Logger",
    ) -> Path:
        await self._update(job_id, JobStatus.ENCODING, PROGRESS_ENCODING_START)
        log.bind(crf=quality.crf, audio=audio_path is not None).info("encoding_video")

        output_path = await self.encoder.encode(
            EncodeRequest(
                frame_pattern=result.frame_pattern,
                output_path=self.videos_dir / f"{job_id}.mp4",
                fps=result.fps,
                crf=quality.crf,
                width=result.width,
                height=result.height,
                audio_path=audio_path,
                audio_volume=request.audio.volume if request.audio else DEFAULT_AUDIO_VOLUME,
                audio_fade=request.audio.fade if request.audio else True,
            )
        )
        await self._update(job_id, JobStatus.ENCODING, PROGRESS_ENCODING_DONE)
        return output_path

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _update(
        self,
        job_id: str,
        status: JobStatus,
        progress: int | None = None,
        **changes: Any,
    ) -> Job:
        """Move a job to ``status``; progress never goes backwards."""
        current = await self.store.get(job_id)
        if current is None:
            raise KeyError(job_id)

        if progress is not None:
            changes["progress"] = max(current.progress, progress)
        updated = await self.store.update(job_id, status=status, **changes)
        return updated or current

    def _expires_at(self) -> datetime | None:
        minutes = self.config.output_retention_minutes
        return utc_after(minutes=minutes) if minutes > 0 else None

    def _schedule_expiry(self, job_id: str, output_path: Path) -> None:
        minutes = self.config.output_retention_minutes
        if minutes <= 0:
            return
        loop = asyncio.get_running_loop()
        loop.call_later(minutes * 60, self._start_expiry, job_id, output_path)

    def _start_expiry(self, job_id: str, output_path: Path) -> None:
        task = asyncio.create_task(self.expire_output(job_id, output_path))
        self._expiry_tasks.add(task)
        task.add_done_callback(self._expiry_tasks.discard)

    async def expire_output(self, job_id: str, output_path: Path) -> None:
        """
        Delete a finished video and drop it from the job record.

        The job stays completed; it just no longer has an ``outputUrl``.
        """
        log = logger.bind(job_id=job_id, path=str(output_path))
        try:
            output_path.unlink(missing_ok=True)
        except OSError as e:
            log.bind(error=str(e)).warning("export_output_expiry_failed")
            return

        await self.store.update(job_id, output_path=None)
        log.info("export_output_expired")


def _remove_frames(frame_dir: Path, log: "Logger") -> None:
    if not frame_dir.exists():
        return
    try:
        shutil.rmtree(frame_dir)
        log.debug("frames_cleaned_up")
    except OSError as e:
        log.bind(error=str(e)).warning("frame_cleanup_failed")


def build_orchestrator(
    config: AppConfig,
    catalog: PresetCatalog,
    store: JobStore,
) -> ExportOrchestrator:
    """Orchestrator wired to headless Chromium and MoviePy."""
    settings = config.settings
    return ExportOrchestrator(
        store=store,
        sampler=PlaywrightFrameSampler(
            headless=settings.sampler_headless,
            timeout_ms=settings.sampler_timeout_ms,
        ),
        encoder=MoviePyEncoder(),
        catalog=catalog,
        config=config.render,
        output_dir=Path(settings.output_dir),
        headline_font=config.brand.headline_font,
    )
