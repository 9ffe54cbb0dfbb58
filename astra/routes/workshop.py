# astra/routes/workshop.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response

from astra.models.workshop import (
    FileEdit,
    FolderToggle,
    NewItem,
    PromptSubmit,
    TerminalCommand,
    WorkshopCreate,
    WorkshopState,
)
from astra.routes.deps import get_gateway_client, get_netlify_client, get_store
from astra.services.gateway_client import GatewayClient
from astra.services.netlify_client import NetlifyClient
from astra.services.workshop import Workshop, WorkshopStore

router = APIRouter()

SUGGESTED_PROMPTS = [
    "Create a crypto wallet interface",
    "Build a trading dashboard",
    "Design a marketing homepage",
    "Develop a mobile app prototype",
    "Build an authentication system",
    "Create an AI-powered assistant",
    "Set up a pricing page",
]


def _workshop(workshop_id: str, store: WorkshopStore) -> Workshop:
    try:
        return store.get(workshop_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Workshop not found")


@router.get("/")
def landing():
    return {"name": "Astra", "prompts": SUGGESTED_PROMPTS}


@router.post("/workshops", response_model=WorkshopState, status_code=201)
def create_workshop(
    req: WorkshopCreate,
    store: WorkshopStore = Depends(get_store),
    gateway: GatewayClient = Depends(get_gateway_client),
):
    """Landing -> workshop: open a session and run the initial prompt, if any."""
    ws = store.create()
    if req.initial_message.strip():
        ws.submit(req.initial_message, gateway)
    return ws.state()


@router.get("/workshops/{workshop_id}", response_model=WorkshopState)
def get_workshop(workshop_id: str, store: WorkshopStore = Depends(get_store)):
    return _workshop(workshop_id, store).state()


@router.delete("/workshops/{workshop_id}", status_code=204)
def delete_workshop(workshop_id: str, store: WorkshopStore = Depends(get_store)):
    try:
        store.delete(workshop_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Workshop not found")
    return Response(status_code=204)


@router.post("/workshops/{workshop_id}/messages", response_model=WorkshopState)
def send_message(
    workshop_id: str,
    req: PromptSubmit,
    store: WorkshopStore = Depends(get_store),
    gateway: GatewayClient = Depends(get_gateway_client),
):
    ws = _workshop(workshop_id, store)
    ws.submit(req.message, gateway)
    return ws.state()


@router.post("/workshops/{workshop_id}/messages/{message_id}/typed", response_model=WorkshopState)
def message_typed(workshop_id: str, message_id: str, store: WorkshopStore = Depends(get_store)):
    ws = _workshop(workshop_id, store)
    try:
        ws.finish_typing(message_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Message not found")
    return ws.state()


@router.post("/workshops/{workshop_id}/folders/toggle", response_model=WorkshopState)
def toggle_folder(workshop_id: str, req: FolderToggle, store: WorkshopStore = Depends(get_store)):
    ws = _workshop(workshop_id, store)
    try:
        ws.toggle_folder(req.path)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Folder not found: {req.path}")
    return ws.state()


@router.post("/workshops/{workshop_id}/items", response_model=WorkshopState)
def create_item(workshop_id: str, req: NewItem, store: WorkshopStore = Depends(get_store)):
    ws = _workshop(workshop_id, store)
    try:
        ws.create_item(req.name, req.type, req.parent_path)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Folder not found: {req.parent_path}")
    except ValueError as ex:
        raise HTTPException(status_code=409, detail=str(ex))
    return ws.state()


@router.put("/workshops/{workshop_id}/files", response_model=WorkshopState)
def edit_file(workshop_id: str, req: FileEdit, store: WorkshopStore = Depends(get_store)):
    ws = _workshop(workshop_id, store)
    try:
        ws.edit_file(req.path, req.content)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"File not found: {req.path}")
    return ws.state()


@router.get("/workshops/{workshop_id}/preview", response_class=HTMLResponse)
def preview(workshop_id: str, store: WorkshopStore = Depends(get_store)):
    return HTMLResponse(_workshop(workshop_id, store).preview)


@router.post("/workshops/{workshop_id}/terminal", response_model=WorkshopState)
def terminal(workshop_id: str, req: TerminalCommand, store: WorkshopStore = Depends(get_store)):
    ws = _workshop(workshop_id, store)
    ws.run_terminal(req.command)
    return ws.state()


@router.post("/workshops/{workshop_id}/publish", response_model=WorkshopState)
def publish(
    workshop_id: str,
    store: WorkshopStore = Depends(get_store),
    deployer: NetlifyClient = Depends(get_netlify_client),
):
    ws = _workshop(workshop_id, store)
    ws.publish(deployer)
    return ws.state()
