import logging

from pydantic import ValidationError

from pictag.models.schemas import (
    NormalizedResponse,
    NormalizedUsage,
    TextBlock,
    UpstreamCompletionResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_STOP_REASON = "end_turn"


def _parse(data) -> UpstreamCompletionResponse:
    if isinstance(data, UpstreamCompletionResponse):
        return data
    if not isinstance(data, dict):
        return UpstreamCompletionResponse()
    try:
        return UpstreamCompletionResponse.model_validate(data)
    except ValidationError as e:
        logger.warning("Unexpected upstream response shape: %s", e)
        id_, model = data.get("id"), data.get("model")
        return UpstreamCompletionResponse(
            id=id_ if isinstance(id_, str) else None,
            model=model if isinstance(model, str) else None,
        )


def normalize_response(data: dict | UpstreamCompletionResponse) -> NormalizedResponse:
    """Map an upstream chat-completion body onto the client message shape.

    Always yields exactly one text block built from ``choices[0]``; missing
    links fall back to an empty text and the ``end_turn`` stop reason.
    """
    upstream = _parse(data)

    first = upstream.choices[0] if upstream.choices else None
    message = first.message if first else None
    text = (message.content if message else None) or ""
    stop_reason = (first.finish_reason if first else None) or DEFAULT_STOP_REASON
    usage = upstream.usage

    return NormalizedResponse(
        id=upstream.id,
        content=[TextBlock(text=text)],
        model=upstream.model,
        stop_reason=stop_reason,
        usage=NormalizedUsage(
            input_tokens=(usage.prompt_tokens if usage else None) or 0,
            output_tokens=(usage.completion_tokens if usage else None) or 0,
        ),
    )
