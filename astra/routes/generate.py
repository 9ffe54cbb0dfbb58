# astra/routes/generate.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from astra.core.errors import AstraError, GatewayError
from astra.models.workshop import GenerateRequest, GenerateResponse
from astra.routes.deps import get_gateway_client
from astra.services.gateway_client import GatewayClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions")


@router.post("/ai-code-generator", response_model=GenerateResponse)
def ai_code_generator(req: GenerateRequest, client: GatewayClient = Depends(get_gateway_client)):
    """Forward chat history to the LLM gateway and return the reply text."""
    try:
        content = client.chat(req.messages)
    except GatewayError as ex:
        return JSONResponse(status_code=ex.status_code, content={"error": ex.message})
    except AstraError as ex:
        logger.error("AI code generator error: %s", ex)
        return JSONResponse(status_code=500, content={"error": str(ex)})
    return GenerateResponse(content=content)
