"""Video encoding using MoviePy."""

import asyncio
import base64
import binascii
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from moviepy import AudioFileClip, ImageSequenceClip, concatenate_audioclips
from moviepy.audio.fx import AudioFadeIn, AudioFadeOut

from brandmotion.core.logging import get_logger
from brandmotion.video.constants import (
    AUDIO_FADE_IN_SECONDS,
    AUDIO_FADE_OUT_SECONDS,
    DEFAULT_AUDIO_VOLUME,
)

logger = get_logger(__name__)

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+)?(?:;[\w=.-]+)*;base64,(?P<data>.+)$", re.DOTALL)

_AUDIO_EXTENSIONS = {
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/ogg": ".ogg",
    "audio/aac": ".aac",
    "audio/mp4": ".m4a",
}


@dataclass
class EncodeRequest:
    """Inputs for one encode."""

    frame_pattern: str  # printf-style, e.g. frame_%05d.png
    output_path: Path
    fps: int
    crf: int
    width: int
    height: int
    audio_path: Path | None = None
    audio_volume: float = DEFAULT_AUDIO_VOLUME
    audio_fade: bool = True


class Encoder(ABC):
    """Abstract base class for encoders."""

    @abstractmethod
    async def encode(self, request: EncodeRequest) -> Path:
        """
        Encode an image sequence (plus optional audio) into one video file.

        Returns:
            Path to the written video
        """
        ...


class MoviePyEncoder(Encoder):
    """H.264/AAC MP4 encoder built on MoviePy (runs in a worker thread)."""

    def __init__(self, preset: str = "medium", threads: int = 4) -> None:
        self.preset = preset
        self.threads = threads

    async def encode(self, request: EncodeRequest) -> Path:
        return await asyncio.to_thread(self._encode, request)

    def _encode(self, request: EncodeRequest) -> Path:
        frames = expand_frame_pattern(request.frame_pattern)
        if not frames:
            raise ValueError(f"No frames found for {request.frame_pattern}")

        log = logger.bind(frames=len(frames), fps=request.fps, crf=request.crf)
        log.info("encoding_started")

        request.output_path.parent.mkdir(parents=True, exist_ok=True)
        video = ImageSequenceClip(frames, fps=request.fps)
        if tuple(video.size) != (request.width, request.height):
            video = video.resized((request.width, request.height))

        audio = None
        if request.audio_path:
            audio = _prepare_audio(
                request.audio_path,
                duration=video.duration,
                volume=request.audio_volume,
                fade=request.audio_fade,
            )
            video = video.with_audio(audio)

        try:
            video.write_videofile(
                str(request.output_path),
                fps=request.fps,
                codec="libx264",
                audio_codec="aac",
                audio_bitrate="192k",
                preset=self.preset,
                threads=self.threads,
                pixel_format="yuv420p",
                ffmpeg_params=["-crf", str(request.crf), "-movflags", "+faststart"],
                logger=None,
            )
        finally:
            # Clean up resources
            if audio is not None:
                audio.close()
            video.close()

        log.bind(output=str(request.output_path)).info("encoding_complete")
        return request.output_path


def _prepare_audio(path: Path, duration: float, volume: float, fade: bool) -> AudioFileClip:
    """Loop or trim audio to the video length, then apply volume and fades."""
    audio = AudioFileClip(str(path))

    if audio.duration < duration:
        loops_needed = int(duration / audio.duration) + 1
        audio = concatenate_audioclips([audio] * loops_needed)

    audio = audio.subclipped(0, duration)
    audio = audio.with_volume_scaled(volume)

    if fade:
        fade_out = min(AUDIO_FADE_OUT_SECONDS, duration)
        audio = audio.with_effects([AudioFadeIn(AUDIO_FADE_IN_SECONDS), AudioFadeOut(fade_out)])

    return audio


def expand_frame_pattern(pattern: str) -> list[str]:
    """Existing files for a printf-style pattern, in frame order from 0."""
    frames: list[str] = []
    index = 0
    while True:
        path = Path(pattern % index)
        if not path.exists():
            return frames
        frames.append(str(path))
        index += 1


def decode_audio_data_url(data_url: str, output_dir: Path, stem: str = "audio_track") -> Path | None:
    """
    Write a base64 audio data URL to disk.

    Returns:
        Path to the written file, or None when the payload cannot be decoded
    """
    match = _DATA_URL_RE.match(data_url.strip())
    if not match:
        logger.bind(prefix=data_url[:32]).warning("audio_data_url_invalid")
        return None

    try:
        payload = base64.b64decode(match.group("data"), validate=False)
    except (binascii.Error, ValueError) as e:
        logger.bind(error=str(e)).warning("audio_data_url_decode_failed")
        return None

    if not payload:
        logger.warning("audio_data_url_empty")
        return None

    extension = _AUDIO_EXTENSIONS.get(match.group("mime") or "", ".mp3")
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{stem}{extension}"
    path.write_bytes(payload)
    logger.bind(path=str(path), bytes=len(payload)).debug("audio_track_written")
    return path
