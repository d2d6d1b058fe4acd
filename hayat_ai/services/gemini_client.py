"""Gemini API client wrapper for handling all generation calls."""

import logging
import uuid
from pathlib import Path
from typing import AsyncGenerator, AsyncIterator, List, Optional

import httpx
from google import genai
from google.genai import errors, types
from pydantic import ValidationError

from hayat_ai.config import Settings
from hayat_ai.models import (
    ConversationSession,
    DocumentRequest,
    ImagePayload,
    ImageRequest,
    OperationHandle,
    ProgressEvent,
    ReferenceImage,
    Turn,
    VideoRequest,
)
from hayat_ai.services.documents import strip_code_fence
from hayat_ai.services.prompts import PERSONA_INSTRUCTION, augment_video_prompt, build_app_prompt
from hayat_ai.services.video_poller import poll_video_generation
from hayat_ai.services.watermark import add_watermark
from hayat_ai.utils.exceptions import (
    AuthenticationError,
    BackendCallError,
    MissingArtifactError,
    NetworkError,
    QuotaExceededError,
    RequestValidationError,
)


class GenerationClient:
    """Client for the Gemini chat, Imagen and Veo capabilities."""

    def __init__(
        self,
        settings: Settings,
        logger=None,
        genai_client: Optional[genai.Client] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize generation client.

        Args:
            settings: Application settings (API key, model names, polling)
            logger: Optional logger instance for output
            genai_client: Preconfigured google-genai client
            http_client: Preconfigured httpx client for video downloads
        """
        self.settings = settings
        self.api_key = settings.api_key
        self.logger = logger or logging.getLogger(__name__)
        self.genai = genai_client or genai.Client(api_key=self.api_key)

        if http_client is None:
            # Long read timeout, generated videos can be large
            timeout_config = httpx.Timeout(
                timeout=10.0,
                read=300.0,
                write=30.0,
                pool=5.0
            )
            http_client = httpx.AsyncClient(timeout=timeout_config, follow_redirects=True)
        self.http = http_client

    async def close(self):
        """Close the HTTP client."""
        await self.http.aclose()

    def _log(self, message: str, level: str = "info"):
        """Log message through the configured logger."""
        if level == "error":
            self.logger.error(message)
        elif level == "warning":
            self.logger.warning(message)
        elif level == "debug":
            self.logger.debug(message)
        else:
            self.logger.info(message)

    @staticmethod
    def _build_request(model, **fields):
        """Validate a request model, raising RequestValidationError on bad input."""
        try:
            return model(**fields)
        except ValidationError as e:
            first = e.errors()[0]
            if first.get("loc") and first["loc"][0] == "prompt":
                raise RequestValidationError("Please enter a prompt.") from e
            raise RequestValidationError(first.get("msg", str(e))) from e

    def _translate_error(self, error: Exception, action: str) -> BackendCallError:
        """Map SDK and transport errors onto the BackendCallError family."""
        if isinstance(error, errors.APIError):
            detail = error.message or str(error)
            if error.code in (401, 403):
                self._log(f"Authentication failed during {action}: {detail}", "error")
                return AuthenticationError(f"Invalid API key: {detail}")
            if error.code == 429:
                self._log(f"Quota exceeded during {action}: {detail}", "error")
                return QuotaExceededError(f"API quota exceeded: {detail}")
            self._log(f"API error {error.code} during {action}: {detail}", "error")
            return BackendCallError(f"{action} failed ({error.code}): {detail}")

        if isinstance(error, (httpx.NetworkError, httpx.TimeoutException)):
            self._log(f"Network error during {action}: {str(error)}", "error")
            return NetworkError(f"Failed to connect to Gemini API: {str(error)}")

        self._log(f"{action} failed: {str(error)}", "error")
        return BackendCallError(f"{action} failed: {str(error)}")

    # Chat

    @staticmethod
    def start_conversation() -> ConversationSession:
        """Create a new conversation seeded with the greeting turn."""
        return ConversationSession()

    def send_turn(self, session: ConversationSession, text: str) -> AsyncIterator[str]:
        """
        Stream the model's reply to one user message.

        History is taken from the session at call time, so call this before
        appending the new user turn.

        Args:
            session: Conversation owned by the caller
            text: User message

        Returns:
            Async iterator of text fragments, consumable once

        Raises:
            RequestValidationError: Empty message
        """
        if not text or not text.strip():
            raise RequestValidationError("Message cannot be empty")
        return self._stream_turn(session.history(), text)

    def _chat_history(self, turns: List[Turn]) -> List[types.Content]:
        return [
            types.Content(role=turn.role, parts=[types.Part(text=turn.text)])
            for turn in turns
        ]

    async def _stream_turn(self, history: List[Turn], text: str) -> AsyncGenerator[str, None]:
        chat = self.genai.aio.chats.create(
            model=self.settings.chat_model,
            config=types.GenerateContentConfig(system_instruction=PERSONA_INSTRUCTION),
            history=self._chat_history(history)
        )
        self._log(f"Sending chat turn ({len(history)} prior turns)", "debug")

        try:
            stream = await chat.send_message_stream(text)
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            raise self._translate_error(e, "Chat") from e

    # Image

    async def generate_image(self, prompt: str, aspect_ratio: str = "1:1") -> ImagePayload:
        """
        Generate one watermarked image.

        Args:
            prompt: Text description for image
            aspect_ratio: 1:1, 16:9, 9:16, 4:3 or 3:4 (passed through as-is)

        Returns:
            JPEG ImagePayload with the watermark applied

        Raises:
            RequestValidationError: Empty prompt
            BackendCallError: Backend call failed
            MissingArtifactError: Backend returned no image
            ImageProcessingError: Watermarking failed
        """
        request = self._build_request(ImageRequest, prompt=prompt, aspect_ratio=aspect_ratio)
        self._log(f"Generating image: {request.prompt[:50]}... ({request.aspect_ratio})", "debug")

        try:
            response = await self.genai.aio.models.generate_images(
                model=self.settings.image_model,
                prompt=request.prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type="image/jpeg",
                    aspect_ratio=request.aspect_ratio
                )
            )
        except (errors.APIError, httpx.HTTPError) as e:
            raise self._translate_error(e, "Image generation") from e

        generated = response.generated_images or []
        if not generated or not generated[0].image or not generated[0].image.image_bytes:
            raise MissingArtifactError("Image generation returned no image")

        return add_watermark(generated[0].image.image_bytes)

    # Document

    async def generate_document(self, prompt: str) -> str:
        """
        Generate a self-contained single-file HTML app.

        Args:
            prompt: Description of the app

        Returns:
            Raw HTML with any surrounding markdown fence removed

        Raises:
            RequestValidationError: Empty prompt
            BackendCallError: Backend call failed
        """
        request = self._build_request(DocumentRequest, prompt=prompt)
        self._log(f"Generating web app: {request.prompt[:50]}...", "debug")

        try:
            response = await self.genai.aio.models.generate_content(
                model=self.settings.document_model,
                contents=build_app_prompt(request.prompt)
            )
        except (errors.APIError, httpx.HTTPError) as e:
            raise self._translate_error(e, "App generation") from e

        return strip_code_fence(response.text or "")

    # Video

    def generate_video(
        self,
        prompt: str,
        image: Optional[ReferenceImage] = None,
        aspect_ratio: str = "16:9"
    ) -> AsyncIterator[ProgressEvent]:
        """
        Start video generation and return its progress events.

        Args:
            prompt: Text description for video
            image: Optional starting image
            aspect_ratio: 16:9, 9:16 or 1:1

        Returns:
            Async iterator of ProgressEvent, consumable once

        Raises:
            RequestValidationError: Empty prompt (raised immediately)
        """
        request = self._build_request(
            VideoRequest, prompt=prompt, aspect_ratio=aspect_ratio, image=image
        )
        augmented = request.model_copy(
            update={"prompt": augment_video_prompt(request.prompt, request.aspect_ratio)}
        )
        return poll_video_generation(
            self,
            augmented,
            poll_interval=self.settings.video_poll_interval_seconds,
            max_wait=self.settings.video_max_wait_seconds,
            logger=self.logger
        )

    @staticmethod
    def _to_handle(operation) -> OperationHandle:
        """Normalize a google-genai video operation."""
        uri = None
        response = getattr(operation, "response", None)
        videos = getattr(response, "generated_videos", None) or []
        if videos and videos[0].video is not None:
            uri = videos[0].video.uri

        error = getattr(operation, "error", None)
        return OperationHandle(
            done=bool(operation.done),
            video_uri=uri,
            error=str(error) if error else None,
            operation=operation
        )

    async def submit_video(self, request: VideoRequest) -> OperationHandle:
        """Submit the video job and return its first operation handle."""
        image = None
        if request.image:
            image = types.Image(image_bytes=request.image.data, mime_type=request.image.mime_type)

        self._log(f"Submitting video: {request.prompt[:50]}...", "debug")
        try:
            operation = await self.genai.aio.models.generate_videos(
                model=self.settings.video_model,
                prompt=request.prompt,
                image=image,
                config=types.GenerateVideosConfig(number_of_videos=1)
            )
        except (errors.APIError, httpx.HTTPError) as e:
            raise self._translate_error(e, "Video generation") from e
        return self._to_handle(operation)

    async def poll_operation(self, handle: OperationHandle) -> OperationHandle:
        """Refresh a not-yet-done operation."""
        try:
            operation = await self.genai.aio.operations.get(handle.operation)
        except (errors.APIError, httpx.HTTPError) as e:
            raise self._translate_error(e, "Video status check") from e
        return self._to_handle(operation)

    async def download_video(self, uri: str) -> str:
        """
        Download a generated video to the artifact directory.

        Args:
            uri: Video URI from the completed operation

        Returns:
            Local path of the downloaded MP4

        Raises:
            BackendCallError: Download failed
        """
        artifact_dir = Path(self.settings.artifact_dir)
        artifact_dir.mkdir(parents=True, exist_ok=True)
        path = artifact_dir / f"video-{uuid.uuid4().hex}.mp4"

        # Merge so the URI's own query (alt=media) survives
        url = httpx.URL(uri).copy_merge_params({"key": self.api_key})

        try:
            async with self.http.stream("GET", url) as response:
                response.raise_for_status()
                with open(path, "wb") as f:
                    async for chunk in response.aiter_bytes():
                        f.write(chunk)
        except httpx.HTTPStatusError as e:
            path.unlink(missing_ok=True)
            if e.response.status_code in (401, 403):
                raise AuthenticationError("Invalid API key") from e
            raise BackendCallError(f"Video download failed: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            path.unlink(missing_ok=True)
            raise self._translate_error(e, "Video download") from e
        except OSError as e:
            path.unlink(missing_ok=True)
            self._log(f"Could not write video to {path}: {str(e)}", "error")
            raise BackendCallError(f"Could not save video: {str(e)}") from e

        self._log(f"Video saved to {path}", "debug")
        return str(path)
