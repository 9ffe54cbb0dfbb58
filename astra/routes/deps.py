# astra/routes/deps.py
from __future__ import annotations

from astra.core.config import Settings
from astra.services.gateway_client import GatewayClient
from astra.services.netlify_client import NetlifyClient
from astra.services.workshop import WorkshopStore

_store = WorkshopStore()


def get_settings() -> Settings:
    return Settings.from_env()


def get_gateway_client() -> GatewayClient:
    return GatewayClient(get_settings())


def get_netlify_client() -> NetlifyClient:
    return NetlifyClient(get_settings())


def get_store() -> WorkshopStore:
    return _store
