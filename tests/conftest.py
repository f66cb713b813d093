import asyncio
from pathlib import Path

import pytest

from flowscript.interpreter import Interpreter
from flowscript.std.sandbox import PythonSandbox
from flowscript.std.workspace import InMemoryWorkspace

ROOT = Path(__file__).resolve().parent.parent


class FakeGenerator:
    """Replays canned replies and records every request."""
    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    async def generate(self, prompt, system_instruction=None):
        self.calls.append((prompt, system_instruction))
        return self.replies.pop(0) if self.replies else ''


@pytest.fixture(autouse=True)
def project_root(monkeypatch):
    # example scripts are opened relative to the project root
    monkeypatch.chdir(ROOT)


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def workspace():
    return InMemoryWorkspace()


@pytest.fixture
def run_flow(generator, workspace):
    """Run a script through a fresh interpreter and return its ScriptRun."""
    def run(source, prompt=''):
        interp = Interpreter(generator, workspace, PythonSandbox())
        return asyncio.run(interp.execute_script(source, prompt))
    return run
