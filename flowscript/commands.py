"""Command records for the FlowScript dispatcher.

Each command a script can call has a small record type populated from
the raw text between its parentheses. Values are kept unresolved; the
interpreter interpolates variables when it runs the command, so that a
command sees the context as it is at that moment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Type

from .arguments import parse_named_params, strip_quotes
from .errors import CommandError


@dataclass
class Command:
    """Base class for command records."""
    name = ''

    @classmethod
    def from_args(cls, raw_args: str) -> 'Command':
        raise NotImplementedError


@dataclass
class Log(Command):
    name = 'log'
    message: str = ''

    @classmethod
    def from_args(cls, raw_args: str) -> 'Log':
        return cls(message=strip_quotes(raw_args))


@dataclass
class CreateNote(Command):
    name = 'createNote'
    title: Optional[str] = None
    content: Optional[str] = None

    @classmethod
    def from_args(cls, raw_args: str) -> 'CreateNote':
        params = parse_named_params(raw_args)
        return cls(title=params.get('title'), content=params.get('content'))


@dataclass
class GetNote(Command):
    name = 'getNote'
    title: str = ''

    @classmethod
    def from_args(cls, raw_args: str) -> 'GetNote':
        return cls(title=strip_quotes(raw_args))


@dataclass
class UpdateNote(Command):
    name = 'updateNote'
    title: Optional[str] = None
    content: Optional[str] = None

    @classmethod
    def from_args(cls, raw_args: str) -> 'UpdateNote':
        params = parse_named_params(raw_args)
        return cls(title=params.get('title'), content=params.get('content'))


@dataclass
class DeleteNote(Command):
    name = 'deleteNote'
    title: str = ''

    @classmethod
    def from_args(cls, raw_args: str) -> 'DeleteNote':
        return cls(title=strip_quotes(raw_args))


@dataclass
class UpdatePlan(Command):
    name = 'updatePlan'
    task: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_args(cls, raw_args: str) -> 'UpdatePlan':
        params = parse_named_params(raw_args)
        return cls(task=params.get('task'), status=params.get('status'))


@dataclass
class Execute(Command):
    name = 'execute'
    code: str = ''

    METADATA_SEPARATORS = (', inputs=', ',inputs=')

    @classmethod
    def from_args(cls, raw_args: str) -> 'Execute':
        # inputs=[...] is FlowScript metadata, not Python
        code = raw_args
        for separator in cls.METADATA_SEPARATORS:
            if separator in code:
                code = code.split(separator)[0]
                break
        return cls(code=code)


@dataclass
class CreateAI(Command):
    name = 'createAI'
    instruction: str = ''

    @classmethod
    def from_args(cls, raw_args: str) -> 'CreateAI':
        return cls(instruction=strip_quotes(raw_args))


@dataclass
class RunAI(Command):
    name = 'runAI'
    prompt: str = ''

    @classmethod
    def from_args(cls, raw_args: str) -> 'RunAI':
        # runAI(prompt="...") or runAI("...")
        prompt = parse_named_params(raw_args).get('prompt') or strip_quotes(raw_args)
        return cls(prompt=prompt)


@dataclass
class RunAgent(Command):
    """``runAI as ID(...)``; built by the statement runner, never by name."""
    name = 'runAI_Agent'
    agent_id: str = ''
    prompt: str = ''

    @classmethod
    def from_args(cls, raw_args: str, agent_id: str = '') -> 'RunAgent':
        return cls(agent_id=agent_id, prompt=strip_quotes(raw_args))


@dataclass
class SaveFile(Command):
    name = 'saveFile'
    file_name: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_args(cls, raw_args: str) -> 'SaveFile':
        params = parse_named_params(raw_args)
        return cls(file_name=params.get('name'), url=params.get('url'))


@dataclass
class DeleteFile(Command):
    name = 'deleteFile'
    file_name: str = ''

    @classmethod
    def from_args(cls, raw_args: str) -> 'DeleteFile':
        return cls(file_name=strip_quotes(raw_args))


@dataclass
class GetFile(Command):
    name = 'getFile'
    file_name: str = ''

    @classmethod
    def from_args(cls, raw_args: str) -> 'GetFile':
        return cls(file_name=strip_quotes(raw_args))


@dataclass
class ChangeMusic(Command):
    name = 'changeMusic'
    mood: str = 'calm'

    @classmethod
    def from_args(cls, raw_args: str) -> 'ChangeMusic':
        return cls(mood=parse_named_params(raw_args).get('mood') or 'calm')


COMMANDS: Dict[str, Type[Command]] = {
    cls.name: cls
    for cls in (
        Log, CreateNote, GetNote, UpdateNote, DeleteNote, UpdatePlan,
        Execute, CreateAI, RunAI, SaveFile, DeleteFile, GetFile, ChangeMusic,
    )
}


# Substring rules applied in order; the last one that matches wins.
MOOD_TRACKS = (
    ('focus', 'MUSIC_MOOG'),
    ('sad', 'MUSIC_FALLING'),
    ('energetic', 'MUSIC_TELL'),
    ('calm', 'REUNITED'),
    ('romantic', 'MUSIC_TELL'),
    ('creative', 'MUSIC_MOOG'),
)
SILENT_TRACK = 'MUSIC_SILENCE'


def track_for_mood(mood: str) -> str:
    track = SILENT_TRACK
    for keyword, track_id in MOOD_TRACKS:
        if keyword in mood:
            track = track_id
    return track


def parse_command(name: str, raw_args: str) -> Command:
    """Build the record for a generic ``Name(...)`` call."""
    try:
        cls = COMMANDS[name]
    except KeyError:
        raise CommandError(name, f"Unknown Command: {name}")
    return cls.from_args(raw_args or '')
