# astra/routes/deploy.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from astra.core.errors import AstraError
from astra.models.workshop import DeployRequest, DeployResponse
from astra.routes.deps import get_netlify_client
from astra.services.netlify_client import NetlifyClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions")


@router.post("/deploy-to-netlify", response_model=DeployResponse, response_model_exclude_none=True)
def deploy_to_netlify(req: DeployRequest, client: NetlifyClient = Depends(get_netlify_client)):
    if not req.htmlContent.strip():
        return JSONResponse(status_code=400, content={"success": False, "error": "HTML content is required"})

    try:
        result = client.deploy_html(req.htmlContent, req.siteName)
    except AstraError as ex:
        logger.error("Error in deploy-to-netlify: %s", ex)
        return JSONResponse(status_code=500, content={"success": False, "error": str(ex)})

    return DeployResponse(success=True, url=result.url, siteId=result.site_id, siteName=result.site_name)
