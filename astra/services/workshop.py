# astra/services/workshop.py
from __future__ import annotations

import logging
import time
import uuid
from typing import Dict, List, Optional

from astra.core.errors import AstraError
from astra.models.workshop import ChatMessage, FileNode, Message, WorkshopState
from astra.services import file_tree
from astra.services.code_parser import parse_ai_response
from astra.services.gateway_client import GatewayClient
from astra.services.netlify_client import DeployResult, NetlifyClient
from astra.services.preview import affects_preview, build_preview_from_files
from astra.services.terminal import BANNER, run_command

logger = logging.getLogger(__name__)

GREETING = (
    "Hello! I'm your AI coding assistant. I can help you write code, debug issues, "
    "and build applications. What would you like to create today?"
)


def _new_id() -> str:
    return uuid.uuid4().hex


class Workshop:
    """
    In-memory state of one workshop page: chat, conversation history sent
    to the model, generated file tree, preview document and terminal.
    """

    def __init__(self, workshop_id: Optional[str] = None):
        self.id = workshop_id or _new_id()
        self.messages: List[ChatMessage] = [ChatMessage(id=_new_id(), role="assistant", content=GREETING)]
        self.history: List[Message] = []
        self.tree: List[FileNode] = []
        self.selected_file: Optional[str] = None
        self.preview: str = ""
        self.terminal_output: List[str] = [BANNER]
        self.deployment_url: Optional[str] = None
        self.is_loading = False

    # ----- chat -----

    def _say(self, content: str, is_typing: bool = True) -> ChatMessage:
        msg = ChatMessage(id=_new_id(), role="assistant", content=content, is_typing=is_typing)
        self.messages.append(msg)
        return msg

    def submit(self, message: str, gateway: GatewayClient) -> Optional[ChatMessage]:
        """Send a prompt with the whole conversation and apply the reply."""
        if not message.strip() or self.is_loading:
            return None

        self.messages.append(ChatMessage(id=_new_id(), role="user", content=message))
        new_history = self.history + [Message(role="user", content=message)]
        self.is_loading = True
        try:
            reply = gateway.chat(new_history)
        except AstraError as ex:
            logger.warning("generation failed for workshop %s: %s", self.id, ex)
            return self._say(f"Error: {ex}", is_typing=False)
        finally:
            self.is_loading = False

        self.history = new_history + [Message(role="assistant", content=reply)]
        return self._apply_reply(reply)

    def _apply_reply(self, reply: str) -> ChatMessage:
        parsed = parse_ai_response(reply)
        if not parsed.files:
            return self._say(reply)

        summary = parsed.explanation or (
            f"Generated {len(parsed.files)} file(s). Check the Code section to view them."
        )
        msg = self._say(summary)

        self.tree = file_tree.create_file_tree(parsed.files, parsed.folders)
        self.preview = build_preview_from_files(parsed.files)
        first = file_tree.first_file(self.tree)
        self.selected_file = first.path if first else None
        logger.info("workshop %s generated %d file(s)", self.id, len(parsed.files))
        return msg

    def finish_typing(self, message_id: str) -> None:
        for m in self.messages:
            if m.id == message_id:
                m.is_typing = False
                return
        raise KeyError(message_id)

    # ----- files -----

    def toggle_folder(self, path: str) -> None:
        if file_tree.toggle_folder(self.tree, path) is None:
            raise KeyError(path)

    def create_item(self, name: str, type: str, parent_path: Optional[str] = None) -> Optional[FileNode]:
        return file_tree.add_node(self.tree, name, type, parent_path)

    def select_file(self, path: str) -> FileNode:
        node = file_tree.find_node(self.tree, path)
        if node is None or node.type != "file":
            raise KeyError(path)
        self.selected_file = path
        return node

    def edit_file(self, path: str, content: str) -> FileNode:
        node = file_tree.update_file_content(self.tree, path, content)
        self.selected_file = path
        if affects_preview(path):
            self.preview = build_preview_from_files(list(file_tree.iter_files(self.tree)))
        return node

    # ----- terminal / publish -----

    def run_terminal(self, command: str) -> None:
        self.terminal_output = run_command(command, self.terminal_output, self.tree)

    def publish(self, deployer: NetlifyClient) -> Optional[DeployResult]:
        if not self.preview:
            self.terminal_output.append("❌ No code to deploy. Generate an app first.")
            return None

        self.terminal_output.append("🚀 Starting deployment to Netlify...")
        site_name = f"astra-app-{int(time.time() * 1000)}"
        try:
            result = deployer.deploy_html(self.preview, site_name)
        except AstraError as ex:
            logger.warning("deployment failed for workshop %s: %s", self.id, ex)
            self.terminal_output.append(f"❌ Deployment failed: {ex}")
            return None

        self.deployment_url = result.url
        self.terminal_output.extend([
            "✅ Deployed successfully!",
            f"🔗 Your app is live at: {result.url}",
            f"📝 Site ID: {result.site_id}",
        ])
        return result

    def state(self) -> WorkshopState:
        return WorkshopState(
            id=self.id,
            messages=self.messages,
            file_tree=self.tree,
            selected_file=self.selected_file,
            preview=self.preview,
            terminal_output=self.terminal_output,
            deployment_url=self.deployment_url,
            is_loading=self.is_loading,
        )


class WorkshopStore:
    """Process-local workshops keyed by id. Nothing survives a restart."""

    def __init__(self):
        self._workshops: Dict[str, Workshop] = {}

    def create(self) -> Workshop:
        ws = Workshop()
        self._workshops[ws.id] = ws
        return ws

    def get(self, workshop_id: str) -> Workshop:
        return self._workshops[workshop_id]

    def delete(self, workshop_id: str) -> None:
        del self._workshops[workshop_id]

    def __len__(self) -> int:
        return len(self._workshops)
