"""
Unit tests for flattening image+text messages into single-string completions.
"""

from pictag.models.schemas import ClassificationRequest, ContentItem, Message
from pictag.services.completion_mapper import (
    flatten_content,
    flatten_messages,
    to_completion_request,
)


def text(value):
    return ContentItem(type="text", text=value)


def image(url):
    return ContentItem.model_validate({"type": "image_url", "image_url": {"url": url}})


class TestFlattenContent:
    def test_joins_text_and_image_placeholders_with_single_space(self) -> None:
        items = [text("Classify"), image("http://a/1.png"), text("please")]

        assert flatten_content(items) == "Classify [Image: http://a/1.png] please"

    def test_skips_items_without_text_or_url(self) -> None:
        items = [
            text(None),
            text("  "),
            ContentItem(type="image_url"),
            ContentItem.model_validate({"type": "image_url", "image_url": {"detail": "low"}}),
            text("kept"),
        ]

        assert flatten_content(items) == "kept"

    def test_none_is_empty(self) -> None:
        assert flatten_content(None) == ""

    def test_empty_image_url_keeps_placeholder(self) -> None:
        assert flatten_content([text("see"), image("")]) == "see [Image: ]"


class TestFlattenMessages:
    def test_one_entry_per_non_blank_message(self) -> None:
        messages = [
            Message(role="system", content=[text("You classify images.")]),
            Message(role="user", content=[image("http://a/1.png")]),
        ]

        result = flatten_messages(messages)

        assert [(m.role, m.content) for m in result] == [
            ("system", "You classify images."),
            ("user", "[Image: http://a/1.png]"),
        ]

    def test_blank_and_empty_messages_are_omitted(self) -> None:
        messages = [
            Message(role="user", content=[]),
            Message(role="user", content=None),
            Message(role="user", content=[text(" ")]),
            Message(role="assistant", content=[text("ok")]),
        ]

        result = flatten_messages(messages)

        assert len(result) == 1
        assert result[0].role == "assistant"

    def test_nothing_left_returns_none(self) -> None:
        assert flatten_messages([Message(role="user", content=[text("")])]) is None
        assert flatten_messages([]) is None
        assert flatten_messages(None) is None


class TestToCompletionRequest:
    def test_copies_scalars_and_flattens(self, sample_payload) -> None:
        request = ClassificationRequest.model_validate(sample_payload)

        result = to_completion_request(request)

        assert result.model == "gpt-4o-mini"
        assert result.stream is False
        assert result.enable_caching is True
        assert result.messages[0].content == (
            "Classify this image. [Image: data:image/png;base64,iVBORw0KGgo=]"
        )
