"""Long-running video operation poller."""

import asyncio
import time
from pathlib import Path
from typing import AsyncGenerator, Optional, Protocol

from hayat_ai.models import OperationHandle, ProgressEvent, VideoRequest, VideoStatus
from hayat_ai.utils.exceptions import MissingArtifactError, PollingTimeoutError


class VideoBackend(Protocol):
    """Backend calls the poller drives."""

    async def submit_video(self, request: VideoRequest) -> OperationHandle:
        ...

    async def poll_operation(self, handle: OperationHandle) -> OperationHandle:
        ...

    async def download_video(self, uri: str) -> str:
        """Fetch the video and return a local path to it."""
        ...


async def poll_video_generation(
    backend: VideoBackend,
    request: VideoRequest,
    poll_interval: float = 10.0,
    max_wait: Optional[float] = None,
    logger=None
) -> AsyncGenerator[ProgressEvent, None]:
    """
    Submit a video request and follow it until the video is on disk.

    Emits GENERATING(25), POLLING(50) once per wait, FETCHING(75) and
    COMPLETED(100, url) in that order. With max_wait unset the operation is
    polled until the backend reports it done. Stopping iteration early leaves
    the backend job running.

    Args:
        backend: Object implementing VideoBackend
        request: Validated video request (prompt already augmented)
        poll_interval: Seconds between status checks
        max_wait: Optional ceiling in seconds on total polling time
        logger: Optional logger instance for output

    Yields:
        ProgressEvent for each stage

    Raises:
        MissingArtifactError: Operation finished without a video URI
        PollingTimeoutError: max_wait exceeded
        BackendCallError: Any backend call failed
    """
    handle = await backend.submit_video(request)
    started = time.monotonic()
    yield ProgressEvent(status=VideoStatus.GENERATING, progress=25)

    while not handle.done:
        if max_wait is not None and time.monotonic() - started >= max_wait:
            raise PollingTimeoutError(
                f"Video generation did not finish within {max_wait:.0f}s"
            )
        await asyncio.sleep(poll_interval)
        yield ProgressEvent(status=VideoStatus.POLLING, progress=50)
        handle = await backend.poll_operation(handle)
        if logger:
            logger.debug(f"Video operation done={handle.done}")

    yield ProgressEvent(status=VideoStatus.FETCHING, progress=75)

    if not handle.video_uri:
        detail = f": {handle.error}" if handle.error else ""
        raise MissingArtifactError(f"Video generation failed or returned no link{detail}")

    path = await backend.download_video(handle.video_uri)
    yield ProgressEvent(status=VideoStatus.COMPLETED, progress=100, url=path)


def release_video(path: str) -> None:
    """Delete a downloaded video once the caller is done with it."""
    Path(path).unlink(missing_ok=True)
