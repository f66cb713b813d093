import logging
from typing import List, Optional

import markdown

from .basic_store import BasicStore, ChatMessage, Note, PlanStep, UserFile

actions_logger = logging.getLogger('flowscript.actions')


class InMemoryWorkspace:
    """Workspace collaborator backed by in-memory stores.

    Used by the command-line runner and the tests. Every side effect a
    script can cause is recorded on the instance so it can be inspected
    after a run.
    """
    def __init__(self, plan: Optional[List[str]] = None):
        self.store = BasicStore()
        self.messages: List[ChatMessage] = []
        self.action_log: List[str] = []
        self.played_tracks: List[str] = []
        for title in plan or []:
            self.store.plan.append(PlanStep(title))

    @property
    def notes(self) -> List[Note]:
        return self.store.notes

    @property
    def plan(self) -> List[PlanStep]:
        return self.store.plan

    @property
    def files(self) -> List[UserFile]:
        return self.store.files

    @property
    def current_track(self) -> Optional[str]:
        return self.played_tracks[-1] if self.played_tracks else None

    def log_action(self, message: str) -> None:
        actions_logger.info(message)
        self.action_log.append(message)

    def add_message(self, message: ChatMessage) -> None:
        self.messages.append(message)

    def render_markdown(self, text: str) -> str:
        return markdown.markdown(text, extensions=['fenced_code', 'tables'])

    def add_note(self, title: str, content: str) -> None:
        self.store.add_note(title, content)

    def get_note_content(self, title: str) -> Optional[str]:
        note = self.store.find_note(title)
        return note.content if note is not None else None

    def update_note_content(self, title: str, content: str) -> bool:
        note = self.store.find_note(title)
        if note is None:
            return False
        note.content = content
        return True

    def delete_note_by_title(self, title: str) -> bool:
        return self.store.remove_note(title)

    def update_plan_status(self, task: str, status: str) -> bool:
        step = self.store.find_step(task)
        if step is None:
            return False
        step.status = status
        return True

    def add_file(self, file: UserFile) -> None:
        self.store.files.append(file)

    def get_file(self, name: str) -> Optional[UserFile]:
        return self.store.find_file(name)

    def delete_file(self, name: str) -> None:
        self.store.remove_files(name)

    def play_music(self, track_id: str) -> None:
        self.played_tracks.append(track_id)


__all__ = [
    'InMemoryWorkspace',
    'ChatMessage',
    'Note',
    'PlanStep',
    'UserFile',
]
