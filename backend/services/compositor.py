"""Still image + narration -> MP4 with a centered zoom-pan, encoded by ffmpeg."""

from __future__ import annotations

import asyncio
import io
import logging
import math
from contextlib import suppress
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

import av

from models.jobs import VideoCompositionJob
from models.profile import ZoomCurve
from services.assets import TempAssetStore
from services.errors import EncodingFailure, PipelineError, TimeoutFailure
from services.images import extension_for, sniff_image_format

logger = logging.getLogger(__name__)

OUTPUT_SIZE = 1024
OUTPUT_FPS = 30
MIN_VIDEO_SECONDS = 1.0
VIDEO_CODEC = "libx264"
AUDIO_CODEC = "libopus"
_DIAGNOSTIC_TAIL = 2000


class EncoderState(StrEnum):
    PENDING = "pending"
    SPAWNED = "spawned"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class EncoderOutcome:
    returncode: int | None
    diagnostics: str
    killed: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.killed


class EncoderProcess:
    """
    One encoder subprocess with a single completion signal.

    pending -> spawned -> running -> terminated. The watcher task is the only
    writer of the completion future, and it writes it once.
    """

    def __init__(self, args: list[str]) -> None:
        self._args = args
        self._proc: asyncio.subprocess.Process | None = None
        self._done: asyncio.Future[EncoderOutcome] | None = None
        self._watcher: asyncio.Task[None] | None = None
        self._killed = False
        self.state = EncoderState.PENDING

    async def start(self) -> None:
        self._done = asyncio.get_running_loop().create_future()
        try:
            self._proc = await asyncio.create_subprocess_exec(
                *self._args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            self.state = EncoderState.TERMINATED
            raise EncodingFailure(f"could not start encoder {self._args[0]!r}: {exc}") from exc
        self.state = EncoderState.SPAWNED
        self._watcher = asyncio.create_task(self._watch())

    async def _watch(self) -> None:
        assert self._proc is not None
        self.state = EncoderState.RUNNING
        try:
            _, stderr = await self._proc.communicate()
            diagnostics = (stderr or b"").decode("utf-8", errors="replace")
        except asyncio.CancelledError:
            # Loop shutdown cancels the watcher too; reap the process before giving up.
            self._killed = True
            with suppress(ProcessLookupError):
                self._proc.kill()
            await asyncio.shield(self._proc.wait())
            self._resolve(EncoderOutcome(self._proc.returncode, "encoder cancelled", killed=True))
            raise
        except Exception as exc:  # noqa: BLE001
            diagnostics = f"encoder pipe error: {exc}"
            with suppress(ProcessLookupError):
                self._proc.kill()
            await self._proc.wait()
        self._resolve(EncoderOutcome(self._proc.returncode, diagnostics, killed=self._killed))

    def _resolve(self, outcome: EncoderOutcome) -> None:
        self.state = EncoderState.TERMINATED
        assert self._done is not None
        if not self._done.done():
            self._done.set_result(outcome)

    async def kill(self) -> EncoderOutcome:
        """Kill the process if still alive and wait until it has terminated."""
        assert self._proc is not None and self._done is not None
        if self._proc.returncode is None:
            self._killed = True
            with suppress(ProcessLookupError):
                self._proc.kill()
        return await asyncio.shield(self._done)

    async def wait(self, timeout: float) -> EncoderOutcome:
        if self._done is None:
            raise RuntimeError("encoder not started")
        try:
            return await asyncio.wait_for(asyncio.shield(self._done), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("[compositor] encoder exceeded %ss; killing", timeout)
            await self.kill()
            raise TimeoutFailure(f"encoder exceeded {timeout}s") from None
        except asyncio.CancelledError:
            logger.warning("[compositor] job cancelled; killing encoder before releasing assets")
            await asyncio.shield(self.kill())
            raise


def probe_audio_duration(data: bytes) -> float:
    """Duration in seconds of the first audio stream; undecodable input fails."""
    if not data:
        raise EncodingFailure("audio is empty")
    try:
        with av.open(io.BytesIO(data)) as container:
            if not container.streams.audio:
                raise EncodingFailure("audio has no audio stream")
            stream = container.streams.audio[0]
            if container.duration:
                return container.duration / av.time_base
            if stream.duration and stream.time_base:
                return float(stream.duration * stream.time_base)
            # Browser-recorded WebM often has no duration header.
            total = 0.0
            for frame in container.decode(stream):
                if frame.sample_rate:
                    total += frame.samples / frame.sample_rate
            return total
    except (av.error.FFmpegError, OSError, ValueError) as exc:
        raise EncodingFailure(f"could not decode audio: {exc}") from exc


def zoompan_filter(zoom: ZoomCurve, *, size: int = OUTPUT_SIZE, fps: int = OUTPUT_FPS) -> str:
    return (
        f"zoompan=z='{zoom.expression()}':d=1"
        ":x='iw/2-(iw/zoom/2)':y='ih/2-(ih/zoom/2)'"
        f":s={size}x{size}:fps={fps}"
    )


def build_encoder_args(
    ffmpeg_path: str,
    *,
    image_path: Path,
    audio_path: Path,
    output_path: Path,
    duration: float,
    zoom: ZoomCurve,
    caption: str | None = None,
) -> list[str]:
    args = [
        ffmpeg_path,
        "-hide_banner",
        "-nostdin",
        "-loglevel", "error",
        "-y",
        "-loop", "1",
        "-framerate", str(OUTPUT_FPS),
        "-i", str(image_path),
        "-i", str(audio_path),
        "-map", "0:v:0",
        "-map", "1:a:0",
        "-vf", zoompan_filter(zoom),
        "-af", "apad",
        "-c:v", VIDEO_CODEC,
        "-pix_fmt", "yuv420p",
        "-r", str(OUTPUT_FPS),
        "-c:a", AUDIO_CODEC,
        "-t", f"{duration:.3f}",
        "-movflags", "+faststart",
    ]
    if caption:
        args += ["-metadata", f"comment={caption}"]
    args.append(str(output_path))
    return args


class VideoCompositor:
    def __init__(
        self,
        store: TempAssetStore,
        *,
        ffmpeg_path: str,
        timeout: float,
        zoom: ZoomCurve,
    ) -> None:
        self._store = store
        self._ffmpeg_path = ffmpeg_path
        self._timeout = timeout
        self._zoom = zoom
        self._inflight: set[asyncio.Task[bytes]] = set()

    async def compose(self, job: VideoCompositionJob) -> bytes:
        """
        Render one MP4. The job runs in its own task so that a caller that
        goes away does not interrupt cleanup: temp files are released after
        the encoder terminates either way.
        """
        task = asyncio.create_task(self._compose(job))
        self._inflight.add(task)
        task.add_done_callback(self._reap)
        return await asyncio.shield(task)

    def _reap(self, task: asyncio.Task[bytes]) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None and not isinstance(exc, PipelineError):
            logger.error("[compositor] job crashed: %s", exc, exc_info=exc)

    async def _compose(self, job: VideoCompositionJob) -> bytes:
        image_format = sniff_image_format(job.image)
        audio_seconds = await asyncio.to_thread(probe_audio_duration, job.audio)
        duration = max(audio_seconds, MIN_VIDEO_SECONDS)
        logger.info(
            "[compositor] start image=%s audio=%.2fs video=%.2fs frames=%d",
            image_format,
            audio_seconds,
            duration,
            math.ceil(duration * OUTPUT_FPS),
        )

        async with (
            self._store.scoped(job.image, f"image{extension_for(image_format)}") as image,
            self._store.scoped(job.audio, "audio.bin") as audio,
            self._store.scoped_output("output.mp4") as output,
        ):
            encoder = EncoderProcess(
                build_encoder_args(
                    self._ffmpeg_path,
                    image_path=image.path,
                    audio_path=audio.path,
                    output_path=output.path,
                    duration=duration,
                    zoom=self._zoom,
                    caption=job.caption,
                )
            )
            await encoder.start()
            outcome = await encoder.wait(self._timeout)
            if not outcome.ok:
                tail = outcome.diagnostics.strip()[-_DIAGNOSTIC_TAIL:]
                logger.error("[compositor] encoder failed rc=%s: %s", outcome.returncode, tail)
                raise EncodingFailure(tail or f"encoder exited with code {outcome.returncode}")

            data = await asyncio.to_thread(_read_output, output.path)
            logger.info("[compositor] finished %d bytes", len(data))
            return data


def _read_output(path: Path) -> bytes:
    if not path.is_file():
        raise EncodingFailure("encoder produced no output")
    data = path.read_bytes()
    if not data:
        raise EncodingFailure("encoder produced an empty file")
    return data
