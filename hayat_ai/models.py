"""Pydantic models for requests, results and progress events."""

import base64
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

IMAGE_ASPECT_RATIOS = ["1:1", "16:9", "9:16", "4:3", "3:4"]
VIDEO_ASPECT_RATIOS = ["16:9", "9:16", "1:1"]

GREETING = "Hello! I'm your creative AI assistant. How can I help you today?"


class Turn(BaseModel):
    """One message in a conversation."""

    role: Literal["user", "model"]
    text: str = ""


class ConversationSession(BaseModel):
    """
    Conversation owned by a single UI tab or API session.

    The session is created by GenerationClient.start_conversation() and lives
    only as long as its owner keeps a reference to it.
    """

    turns: List[Turn] = Field(
        default_factory=lambda: [Turn(role="model", text=GREETING)]
    )

    def add_turn(self, role: str, text: str = "") -> Turn:
        """Append a turn and return it."""
        turn = Turn(role=role, text=text)
        self.turns.append(turn)
        return turn

    def history(self) -> List[Turn]:
        """Completed turns to send as backend history.

        Leading model turns (the seeded greeting) and empty turns are left out.
        """
        turns = [t for t in self.turns if t.text]
        while turns and turns[0].role == "model":
            turns.pop(0)
        return turns


class _PromptRequest(BaseModel):
    """Shared prompt validation for generation requests."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., min_length=1, description="Text description")

    @field_validator("prompt")
    @classmethod
    def prompt_not_empty(cls, v):
        """Ensure prompt is not empty."""
        if not v.strip():
            raise ValueError("Prompt cannot be empty")
        return v


class ImageRequest(_PromptRequest):
    """Request model for image generation."""

    # Not checked against IMAGE_ASPECT_RATIOS, the backend rejects unknown values
    aspect_ratio: str = Field("1:1", description="One of 1:1, 16:9, 9:16, 4:3, 3:4")


class ReferenceImage(BaseModel):
    """Optional starting image for video generation."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str

    @field_validator("mime_type")
    @classmethod
    def valid_mime_type(cls, v):
        """Only image uploads are accepted."""
        if not v.startswith("image/"):
            raise ValueError("Please select a valid image file (e.g., PNG, JPEG, WEBP).")
        return v


class VideoRequest(_PromptRequest):
    """Request model for text/image-to-video generation."""

    aspect_ratio: str = Field("16:9", description="16:9, 9:16 or 1:1")
    image: Optional[ReferenceImage] = None


class DocumentRequest(_PromptRequest):
    """Request model for single-file web app generation."""
    pass


class ChatMessageRequest(BaseModel):
    """Request model for one chat turn."""

    message: str


class ImagePayload(BaseModel):
    """Encoded image returned to the caller."""

    data: bytes
    mime_type: str = "image/jpeg"

    @property
    def data_url(self) -> str:
        """Embedded data URL suitable for <img src>."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class ImageResponse(BaseModel):
    """Response model for image generation."""

    mime_type: str
    data_url: str


class GeneratedDocument(BaseModel):
    """Generated web app with its download filename."""

    html: str
    filename: str


class ChatSessionResponse(BaseModel):
    """Response model for a new chat session."""

    session_id: str
    turns: List[Turn]


class OperationHandle(BaseModel):
    """Normalized view of a backend video operation."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    done: bool = False
    video_uri: Optional[str] = None
    error: Optional[str] = None
    # Backend object passed back on the next poll
    operation: Any = Field(default=None, exclude=True)


class VideoStatus(str, Enum):
    """Video generation lifecycle stages."""

    GENERATING = "GENERATING"
    POLLING = "POLLING"
    FETCHING = "FETCHING"
    COMPLETED = "COMPLETED"


class ProgressEvent(BaseModel):
    """Transient status update emitted during video generation."""

    status: VideoStatus
    progress: int
    url: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    message: str
    type: str
