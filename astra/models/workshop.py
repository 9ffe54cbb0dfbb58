# astra/models/workshop.py
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class Message(BaseModel):
    role: str
    content: str


class ChatMessage(BaseModel):
    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    is_typing: bool = False


class ParsedFile(BaseModel):
    path: str
    content: str
    language: str


class ParsedFolder(BaseModel):
    path: str


class ParsedResponse(BaseModel):
    files: List[ParsedFile] = []
    folders: List[ParsedFolder] = []
    explanation: str = ""


class FileNode(BaseModel):
    name: str
    type: Literal["file", "folder"]
    path: str
    children: Optional[List["FileNode"]] = None
    expanded: Optional[bool] = None
    content: Optional[str] = None
    language: Optional[str] = None

    @model_validator(mode="after")
    def _children_iff_folder(self) -> "FileNode":
        if self.type == "folder" and self.children is None:
            self.children = []
        if self.type == "file" and self.children is not None:
            raise ValueError("file nodes cannot have children")
        return self


FileNode.model_rebuild()


# ----- edge function wire format -----

class GenerateRequest(BaseModel):
    messages: List[Message]


class GenerateResponse(BaseModel):
    content: str


class ErrorResponse(BaseModel):
    error: str


class DeployRequest(BaseModel):
    htmlContent: str = ""
    siteName: Optional[str] = None


class DeployResponse(BaseModel):
    success: bool
    url: Optional[str] = None
    siteId: Optional[str] = None
    siteName: Optional[str] = None
    error: Optional[str] = None


# ----- workshop API -----

class WorkshopCreate(BaseModel):
    initial_message: str = ""


class PromptSubmit(BaseModel):
    message: str


class FolderToggle(BaseModel):
    path: str


class FileEdit(BaseModel):
    path: str
    content: str


class NewItem(BaseModel):
    name: str
    type: Literal["file", "folder"]
    parent_path: Optional[str] = None


class TerminalCommand(BaseModel):
    command: str


class WorkshopState(BaseModel):
    id: str
    messages: List[ChatMessage]
    file_tree: List[FileNode]
    selected_file: Optional[str] = None
    preview: str = ""
    terminal_output: List[str]
    deployment_url: Optional[str] = None
    is_loading: bool = False
