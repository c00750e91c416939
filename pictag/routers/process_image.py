from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import Response

from pictag.models.schemas import ClassificationRequest
from pictag.services.relay import (
    ClientInputError,
    RelayService,
    UpstreamApplicationError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)

router = APIRouter(prefix="/api/processimage", tags=["processimage"])


@router.post("/complete-image")
async def complete_image(
    request: Request,
    payload: Optional[ClassificationRequest] = Body(default=None),
):
    """Relay a chat-completion request with inline images to the upstream LLM."""
    relay: RelayService = request.app.state.relay

    try:
        body = await relay.forward(payload)
    except ClientInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamApplicationError as e:
        return Response(
            content=e.body,
            status_code=e.status_code,
            media_type=e.content_type or "text/plain",
        )
    except UpstreamTimeoutError as e:
        raise HTTPException(status_code=504, detail=str(e))
    except UpstreamTransportError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return Response(content=body, media_type="application/json")
