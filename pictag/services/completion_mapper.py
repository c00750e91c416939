"""Flatten image+text chat messages into single-string completion messages.

Upstreams that only accept plain string content get the text parts and an
``[Image: <url>]`` placeholder per image, joined by a single space.
"""

from pictag.models.schemas import (
    ClassificationRequest,
    CompletionMessage,
    CompletionRequest,
    ContentItem,
    Message,
)


def flatten_content(items: list[ContentItem] | None) -> str:
    parts: list[str] = []
    for item in items or []:
        if item.type == "text" and item.text and item.text.strip():
            parts.append(item.text)
        elif item.type == "image_url" and item.image_url and item.image_url.url is not None:
            parts.append(f"[Image: {item.image_url.url}]")
    return " ".join(parts)


def flatten_messages(messages: list[Message] | None) -> list[CompletionMessage] | None:
    if not messages:
        return None

    flattened = []
    for message in messages:
        if not message.content:
            continue
        content = flatten_content(message.content)
        if content.strip():
            flattened.append(CompletionMessage(role=message.role, content=content))

    return flattened or None


def to_completion_request(request: ClassificationRequest) -> CompletionRequest:
    return CompletionRequest(
        model=request.model,
        messages=flatten_messages(request.messages),
        stream=request.stream,
        enable_caching=request.enable_caching,
    )
