# astra/services/netlify_client.py
from __future__ import annotations

import io
import logging
import time
import zipfile
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests as http_requests

from astra.core.config import Settings
from astra.core.errors import ConfigurationError, DeployError, DeployTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeployResult:
    url: str
    site_id: str
    site_name: str


def build_site_archive(html: str) -> bytes:
    """Single-entry ``index.html`` archive, stored without compression."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as zf:
        zf.writestr("index.html", html)
    return buffer.getvalue()


class NetlifyClient:
    """
    Publishes a preview document as a brand new Netlify site.

    create site -> upload zip deploy -> poll deploy until ready. The
    sequence is not resumable and a site created before a failure is left
    in place.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: Optional[http_requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or Settings.from_env()
        self.base_url = self.settings.netlify_base_url.rstrip("/")
        # module-level requests.post/get unless a session is injected
        self.session = session or http_requests
        self.sleep = sleep

    def _headers(self, **extra: str) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.settings.netlify_token}"}
        headers.update(extra)
        return headers

    def _check(self, resp: Any, action: str) -> Dict[str, Any]:
        if not resp.ok:
            logger.error("Netlify API error during %s: %s %s", action, resp.status_code, resp.text)
            raise DeployError(f"Netlify {action} failed: {resp.status_code} {resp.text}")
        try:
            data = resp.json()
        except ValueError as ex:
            raise DeployError(f"Netlify {action} returned an invalid response") from ex
        if not isinstance(data, dict):
            raise DeployError(f"Netlify {action} returned an invalid response")
        return data

    def _request(self, method: str, url: str, action: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            resp = getattr(self.session, method)(url, **kwargs)
        except http_requests.RequestException as ex:
            raise DeployError(f"Netlify {action} failed: {type(ex).__name__}") from ex
        return self._check(resp, action)

    def create_site(self, site_name: Optional[str]) -> Dict[str, Any]:
        body = {"name": site_name} if site_name else {}
        return self._request("post", f"{self.base_url}/sites", "site creation", json=body, headers=self._headers())

    def upload_deploy(self, site_id: str, archive: bytes) -> Dict[str, Any]:
        return self._request(
            "post",
            f"{self.base_url}/sites/{site_id}/deploys",
            "deploy upload",
            data=archive,
            headers=self._headers(**{"Content-Type": "application/zip"}),
        )

    def get_deploy(self, deploy_id: str) -> Dict[str, Any]:
        return self._request("get", f"{self.base_url}/deploys/{deploy_id}", "deploy status", headers=self._headers())

    def wait_until_ready(self, deploy_id: str) -> Dict[str, Any]:
        attempts = self.settings.deploy_poll_attempts
        for attempt in range(1, attempts + 1):
            deploy = self.get_deploy(deploy_id)
            state = deploy.get("state")
            logger.info("deploy %s state=%s (%d/%d)", deploy_id, state, attempt, attempts)
            if state == "ready":
                return deploy
            if state == "error":
                raise DeployError(deploy.get("error_message") or "Netlify deploy failed")
            if attempt < attempts:
                self.sleep(self.settings.deploy_poll_interval)
        raise DeployTimeoutError(f"Deploy {deploy_id} was not ready after {attempts} checks")

    def deploy_html(self, html: str, site_name: Optional[str] = None) -> DeployResult:
        if not html or not html.strip():
            raise DeployError("HTML content is required")
        if not self.settings.netlify_token:
            raise ConfigurationError("Netlify access token not configured")

        logger.info("Deploying to Netlify: %s", site_name)
        site = self.create_site(site_name)
        site_id = site.get("id")
        if not site_id:
            raise DeployError("Netlify site creation returned no site id")

        deploy = self.upload_deploy(site_id, build_site_archive(html))
        deploy_id = deploy.get("id")
        if not deploy_id:
            raise DeployError("Netlify deploy upload returned no deploy id")
        ready = self.wait_until_ready(deploy_id)

        url = ready.get("ssl_url") or ready.get("url") or site.get("ssl_url") or site.get("url")
        if not url:
            raise DeployError("Netlify deploy is ready but reported no URL")
        logger.info("Deployment successful: %s", url)
        return DeployResult(url=url, site_id=site_id, site_name=site.get("name") or site_name or "")
