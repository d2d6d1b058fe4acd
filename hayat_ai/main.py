"""FastAPI application exposing the Hayat Ai generation capabilities."""

import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse, JSONResponse, StreamingResponse

from hayat_ai import __version__
from hayat_ai.config import Settings, get_settings
from hayat_ai.models import (
    ChatMessageRequest,
    ChatSessionResponse,
    ConversationSession,
    DocumentRequest,
    GeneratedDocument,
    ImageRequest,
    ImageResponse,
    ReferenceImage,
)
from hayat_ai.services.chat import APOLOGY, stream_reply
from hayat_ai.services.documents import generate_filename
from hayat_ai.services.gemini_client import GenerationClient
from hayat_ai.services.sse_handler import format_sse_event
from hayat_ai.services.video_poller import release_video
from hayat_ai.utils import exceptions
from hayat_ai.utils.logger import setup_logging

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no"
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    A missing API_KEY raises StartupConfigError here and aborts startup.
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting Hayat Ai API...")

    Path(settings.artifact_dir).mkdir(parents=True, exist_ok=True)
    app.state.generation_client = GenerationClient(settings)
    app.state.chat_sessions = {}

    yield  # Application runs

    logger.info("Shutting down Hayat Ai API...")
    await app.state.generation_client.close()


app = FastAPI(
    title="Hayat Ai",
    description="Chat, image, video and web app generation powered by Google Gemini",
    version=__version__,
    lifespan=lifespan
)


def get_client(request: Request) -> GenerationClient:
    """Generation client created at startup."""
    return request.app.state.generation_client


def get_chat_sessions(request: Request) -> Dict[str, ConversationSession]:
    """Chat sessions keyed by session id, held in memory only."""
    return request.app.state.chat_sessions


def get_artifact_dir() -> Path:
    """Directory holding downloaded videos."""
    return Path(get_settings().artifact_dir)


# Exception Handlers

@app.exception_handler(exceptions.RequestValidationError)
async def validation_exception_handler(request: Request, exc: exceptions.RequestValidationError):
    """Handle requests rejected before reaching the backend."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "RequestValidationError",
            "message": str(exc),
            "type": "validation_error"
        }
    )


@app.exception_handler(exceptions.HayatAIError)
async def generation_exception_handler(request: Request, exc: exceptions.HayatAIError):
    """Handle backend and processing errors with a generic message."""
    logger.error(f"{exc.__class__.__name__}: {exc}")
    return JSONResponse(
        status_code=502,
        content={
            "error": exc.__class__.__name__,
            "message": "Failed to generate. Please try again.",
            "type": "generation_error"
        }
    )


# Routes

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/api/chat/sessions", response_model=ChatSessionResponse)
async def create_chat_session(sessions: Dict[str, ConversationSession] = Depends(get_chat_sessions)):
    """Start a conversation and return its id with the greeting turn."""
    session_id = uuid.uuid4().hex
    sessions[session_id] = GenerationClient.start_conversation()
    return ChatSessionResponse(session_id=session_id, turns=sessions[session_id].turns)


@app.delete("/api/chat/sessions/{session_id}")
async def end_chat_session(
    session_id: str,
    sessions: Dict[str, ConversationSession] = Depends(get_chat_sessions)
):
    """Forget a conversation."""
    if sessions.pop(session_id, None) is None:
        raise HTTPException(status_code=404, detail="Unknown chat session")
    return {"status": "deleted"}


@app.post("/api/chat/sessions/{session_id}/messages")
async def send_chat_message(
    session_id: str,
    body: ChatMessageRequest,
    client: GenerationClient = Depends(get_client),
    sessions: Dict[str, ConversationSession] = Depends(get_chat_sessions)
):
    """
    Send one user message.

    Returns SSE stream of {"text": fragment} events followed by
    {"status": "done"}, or {"status": "failed", "text": apology}.
    """
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Unknown chat session")
    if not body.message.strip():
        raise exceptions.RequestValidationError("Message cannot be empty")

    async def event_generator():
        sent = 0
        try:
            async for turn in stream_reply(client, session, body.message):
                yield format_sse_event({"text": turn.text[sent:]})
                sent = len(turn.text)
        except exceptions.BackendCallError as e:
            logger.error(f"Chat stream failed: {e}")
            yield format_sse_event({"status": "failed", "text": APOLOGY}, event_type="error")
            return
        yield format_sse_event({"status": "done"})

    return StreamingResponse(event_generator(), media_type="text/event-stream", headers=SSE_HEADERS)


@app.post("/api/image", response_model=ImageResponse)
async def create_image(body: ImageRequest, client: GenerationClient = Depends(get_client)):
    """Generate one watermarked image, returned as a data URL."""
    image = await client.generate_image(body.prompt, body.aspect_ratio)
    return ImageResponse(mime_type=image.mime_type, data_url=image.data_url)


@app.post("/api/video")
async def create_video(
    prompt: str = Form(...),
    aspect_ratio: str = Form("16:9"),
    image: Optional[UploadFile] = File(None),
    client: GenerationClient = Depends(get_client)
):
    """
    Generate a video from text and an optional starting image.

    Returns SSE stream of progress events. The COMPLETED event's url points at
    /api/artifacts/{name}.
    """
    reference = None
    if image is not None:
        if not (image.content_type or "").startswith("image/"):
            raise exceptions.RequestValidationError(
                "Please select a valid image file (e.g., PNG, JPEG, WEBP)."
            )
        reference = ReferenceImage(data=await image.read(), mime_type=image.content_type)

    # Raises RequestValidationError before the stream starts
    events = client.generate_video(prompt, reference, aspect_ratio)

    async def event_generator():
        try:
            async for event in events:
                data = event.model_dump(mode="json", exclude_none=True)
                if event.url:
                    data["url"] = f"/api/artifacts/{Path(event.url).name}"
                yield format_sse_event(data)
        except exceptions.HayatAIError as e:
            logger.error(f"Video generation failed: {e}")
            yield format_sse_event(
                {"status": "FAILED", "progress": 0, "message": "Failed to generate video. Please try again."},
                event_type="error"
            )

    return StreamingResponse(event_generator(), media_type="text/event-stream", headers=SSE_HEADERS)


def _artifact_path(name: str, artifact_dir: Path) -> Path:
    path = artifact_dir / Path(name).name
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Unknown artifact")
    return path


@app.get("/api/artifacts/{name}")
async def get_artifact(name: str, artifact_dir: Path = Depends(get_artifact_dir)):
    """Serve a downloaded video."""
    return FileResponse(_artifact_path(name, artifact_dir), media_type="video/mp4")


@app.delete("/api/artifacts/{name}")
async def delete_artifact(name: str, artifact_dir: Path = Depends(get_artifact_dir)):
    """Release a downloaded video."""
    release_video(str(_artifact_path(name, artifact_dir)))
    return {"status": "deleted"}


@app.post("/api/app", response_model=GeneratedDocument)
async def create_app(body: DocumentRequest, client: GenerationClient = Depends(get_client)):
    """Generate a single-file HTML app and its download filename."""
    html = await client.generate_document(body.prompt)
    return GeneratedDocument(html=html, filename=generate_filename(body.prompt))


def run(settings: Optional[Settings] = None):
    """Run the API with uvicorn."""
    import uvicorn

    settings = settings or get_settings()
    uvicorn.run("hayat_ai.main:app", host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    run()
