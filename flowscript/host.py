"""Collaborator interfaces the interpreter talks to.

The interpreter never reaches for a model, a note store or a code
runner directly; it is handed objects that satisfy these protocols.
Reference implementations live in :mod:`flowscript.std`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from .std.workspace.basic_store import ChatMessage, UserFile


class TextGenerator(Protocol):
    async def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        """Return generated text; a reply starting with ``Error`` signals failure."""
        ...


class Workspace(Protocol):
    def log_action(self, message: str) -> None: ...

    def add_message(self, message: ChatMessage) -> None: ...

    def render_markdown(self, text: str) -> str: ...

    def add_note(self, title: str, content: str) -> None: ...

    def get_note_content(self, title: str) -> Optional[str]: ...

    def update_note_content(self, title: str, content: str) -> bool: ...

    def delete_note_by_title(self, title: str) -> bool: ...

    def update_plan_status(self, task: str, status: str) -> bool: ...

    def add_file(self, file: UserFile) -> None: ...

    def get_file(self, name: str) -> Optional[UserFile]: ...

    def delete_file(self, name: str) -> None: ...

    def play_music(self, track_id: str) -> None: ...


@dataclass
class HostBridge:
    """The two callbacks user code can reach from inside a sandbox."""
    get_input: Callable[[str], Any]
    set_output: Callable[[str, Any], None]


class Sandbox(Protocol):
    async def boot(self) -> None:
        """Prepare the sandbox; calling it again must be harmless."""
        ...

    async def run(self, code: str, bridge: HostBridge) -> Any:
        """Run user code and return its result, raising SandboxError on failure."""
        ...
