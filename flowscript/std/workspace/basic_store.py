import uuid
from dataclasses import dataclass, field
from typing import List, Optional


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Note:
    title: str
    content: str
    id: str = field(default_factory=_new_id)


@dataclass
class PlanStep:
    title: str
    description: str = ''
    status: str = 'pending'
    id: str = field(default_factory=_new_id)


@dataclass
class UserFile:
    name: str
    url: str
    type: str = 'binary'
    description: Optional[str] = None
    id: str = field(default_factory=_new_id)


@dataclass
class ChatMessage:
    role: str
    type: str
    text: str
    display_html: str = ''


class BasicStore:
    """Keeps notes, plan steps and files in memory."""
    def __init__(self):
        self.notes: List[Note] = []
        self.plan: List[PlanStep] = []
        self.files: List[UserFile] = []

    def find_note(self, title: str) -> Optional[Note]:
        for note in self.notes:
            if note.title == title:
                return note
        return None

    def add_note(self, title: str, content: str) -> Note:
        note = Note(title, content)
        self.notes.append(note)
        return note

    def remove_note(self, title: str) -> bool:
        note = self.find_note(title)
        if note is None:
            return False
        self.notes.remove(note)
        return True

    def find_step(self, task: str) -> Optional[PlanStep]:
        needle = task.lower()
        for step in self.plan:
            if needle in step.title.lower():
                return step
        return None

    def find_file(self, name: str) -> Optional[UserFile]:
        for f in self.files:
            if f.name == name:
                return f
        return None

    def remove_files(self, name: str) -> int:
        kept = [f for f in self.files if f.name != name]
        removed = len(self.files) - len(kept)
        self.files = kept
        return removed
