from pictag.models.schemas import ClassificationRequest

CATEGORIZE_PROMPT = """You are an image categorization assistant.
Look at the image and choose exactly ONE category from this list:
{categories}

Respond with ONLY the category name, one word, no punctuation."""


def build_categorize_prompt(categories: list[str]) -> str:
    return CATEGORIZE_PROMPT.format(categories="\n".join(f"- {c}" for c in categories))


def build_categorize_request(
    image_b64: str,
    mime_type: str,
    model: str,
    categories: list[str],
    detail: str = "low",
) -> ClassificationRequest:
    return ClassificationRequest.model_validate(
        {
            "model": model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": build_categorize_prompt(categories)},
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": f"data:{mime_type};base64,{image_b64}",
                                "detail": detail,
                            },
                        },
                    ],
                },
            ],
            "stream": False,
            "enable_caching": False,
        }
    )
