from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# --- Relay request (client -> relay -> upstream) ---

class ImageUrl(BaseModel):
    url: Optional[str] = None
    detail: Optional[str] = None


class ContentItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["text", "image_url"]
    text: Optional[str] = None
    image_url: Optional[ImageUrl] = Field(
        default=None, validation_alias=AliasChoices("image_url", "imageUrl")
    )


class Message(BaseModel):
    role: Optional[str] = None
    content: Optional[list[ContentItem]] = None


class ClassificationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    model: Optional[str] = None
    messages: Optional[list[Message]] = None
    stream: bool = False
    enable_caching: bool = Field(
        default=False, validation_alias=AliasChoices("enable_caching", "enableCaching")
    )

    def to_upstream(self) -> dict:
        """Upstream chat-completions body: snake_case names, null fields dropped."""
        return self.model_dump(exclude_none=True)


# --- Flattened completion shape ---

class CompletionMessage(BaseModel):
    role: Optional[str] = None
    content: str


class CompletionRequest(BaseModel):
    model: Optional[str] = None
    messages: Optional[list[CompletionMessage]] = None
    stream: bool = False
    enable_caching: bool = False


# --- Upstream response ---

class ChoiceMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class Choice(BaseModel):
    index: Optional[int] = None
    message: Optional[ChoiceMessage] = None
    finish_reason: Optional[str] = None


class CompletionUsage(BaseModel):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class UpstreamCompletionResponse(BaseModel):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: Optional[list[Choice]] = None
    usage: Optional[CompletionUsage] = None


# --- Client-facing response ---

class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str = ""


class NormalizedUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class NormalizedResponse(BaseModel):
    id: Optional[str] = None
    type: Literal["message"] = "message"
    role: Literal["assistant"] = "assistant"
    content: list[TextBlock] = Field(default_factory=list)
    model: Optional[str] = None
    stop_reason: str = "end_turn"
    usage: NormalizedUsage = Field(default_factory=NormalizedUsage)
