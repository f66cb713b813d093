"""Interpreter for the FlowScript language.

A script is run in three phases. The optional ``beforePrompt`` block
runs first. Next, the answer is produced from a top-level
``overridePrompt`` block or by sending the resolved ``Prompt`` block to
the text generator. Finally the optional ``afterPrompt`` block runs.
Whatever ends up in ``answer`` is posted to the workspace as a chat
message. Any error aborts the run and is posted as a single system
message instead.

State that belongs to one run (the context, registered agents, the
pending ``createAI`` instruction and the last command result) lives on
a :class:`ScriptRun`, so one :class:`Interpreter` can serve several
scripts, even concurrently. Only the collaborators and the sandbox boot
are shared.
"""

from __future__ import annotations

import asyncio
import html
import logging
from typing import Any, Dict, List, Optional

from .ast import OverrideStart, AgentCall, CommandCall, GetOutput, SetId
from .commands import (
    Command, Log, CreateNote, GetNote, UpdateNote, DeleteNote, UpdatePlan,
    Execute, CreateAI, RunAI, RunAgent, SaveFile, DeleteFile, GetFile,
    ChangeMusic, parse_command, track_for_mood,
)
from .context import ExecutionContext
from .errors import CommandError, FlowScriptError, SandboxError
from .host import HostBridge, Sandbox, TextGenerator, Workspace
from .parser import extract_blocks, extract_multiline_args, is_override_end, parse_statement
from .std.workspace.basic_store import ChatMessage, UserFile

logger = logging.getLogger('flowscript')

FAILURE_TEXT = '🛑 Script Execution Failed!'

ERROR_CARD = """
<div class="flowscript-error">
    <div class="flowscript-error-title">
        <span class="material-symbols-outlined">error_outline</span>
        <span>EXECUTION HALTED</span>
    </div>
    <div class="flowscript-error-message">{message}</div>
</div>
"""


class ScriptRun:
    """Mutable state of a single script execution."""
    def __init__(self, prompt: str):
        self.context = ExecutionContext(prompt=prompt, answer='')
        self.agents: Dict[str, str] = {}
        self.pending_instruction: Optional[str] = None
        self.last_result: Any = None
        self.error: Optional[str] = None

    def resolve(self, text: Optional[str]) -> str:
        return self.context.resolve(text)


def strip_error_prefix(message: str) -> str:
    if SandboxError.PREFIX in message:
        return message.split(SandboxError.PREFIX, 1)[1].strip()
    return message


def error_message(exc: BaseException) -> ChatMessage:
    text = str(exc) or 'Unknown error occurred.'
    return ChatMessage(
        role='model',
        type='system',
        text=FAILURE_TEXT,
        display_html=ERROR_CARD.format(message=html.escape(text, quote=False)),
    )


class Interpreter:
    """Runs FlowScript scripts against a set of collaborators."""
    def __init__(self, generator: TextGenerator, workspace: Workspace, sandbox: Optional[Sandbox] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.generator = generator
        self.workspace = workspace
        self.sandbox = sandbox
        self.sandbox_ready = False
        self.debug_level = debug_level
        self.debug_handler: Optional[logging.Handler] = None
        self.previous_level = logger.level
        if debug_level > 0:
            self.debug_handler = logging.FileHandler(debug_file, mode='w', encoding='utf-8')
            self.debug_handler.setFormatter(logging.Formatter('%(name)s %(levelname)s %(message)s'))
            logger.addHandler(self.debug_handler)
            logger.setLevel(logging.DEBUG)

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            logger.debug(msg)

    def close(self):
        if self.debug_handler is not None:
            logger.removeHandler(self.debug_handler)
            self.debug_handler.close()
            self.debug_handler = None
            logger.setLevel(self.previous_level)

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Public API
    async def execute_script(self, source: str, prompt: str) -> ScriptRun:
        run = ScriptRun(prompt)
        try:
            blocks = extract_blocks(source)
            self.debug(f"blocks: {blocks}")

            if blocks.before_prompt:
                self.debug('run beforePrompt')
                await self.run_block(blocks.before_prompt, run)

            if blocks.override_prompt:
                run.context.answer = run.resolve(blocks.override_prompt)
            elif blocks.prompt:
                ai_prompt = run.resolve(blocks.prompt)
                self.workspace.log_action('Asking AI...')
                response = await self.generator.generate(ai_prompt)
                if response.startswith('Error'):
                    raise FlowScriptError(f"AI Request Failed: {response}")
                run.context.answer = response

            if blocks.after_prompt:
                self.debug('run afterPrompt')
                await self.run_block(blocks.after_prompt, run)

            answer = run.context.get('answer')
            if answer:
                text = run.context.answer
                self.workspace.add_message(ChatMessage(
                    role='model',
                    type='text',
                    text=text,
                    display_html=self.workspace.render_markdown(text),
                ))
        except Exception as e:
            logger.debug('script execution failed', exc_info=True)
            run.error = str(e) or 'Unknown error occurred.'
            self.workspace.add_message(error_message(e))
        return run

    async def run_block(self, block_text: str, run: ScriptRun) -> None:
        lines = block_text.split('\n')
        i = 0
        while i < len(lines):
            line = lines[i].strip()
            if not line or line.startswith('#'):
                i += 1
                continue

            statement = parse_statement(line)
            self.debug(f"line {i}: {line!r} -> {statement}", 2)

            if isinstance(statement, OverrideStart):
                i += 1
                buffer: List[str] = []
                while i < len(lines) and not is_override_end(lines[i]):
                    buffer.append(lines[i])
                    i += 1
                run.context.answer = run.resolve('\n'.join(buffer).strip())
                # skip the end marker
                i += 1
            elif isinstance(statement, AgentCall):
                args = extract_multiline_args(lines, i)
                await self.dispatch(RunAgent.from_args(args.content, agent_id=statement.agent_id), run)
                i = args.next_index
            elif isinstance(statement, CommandCall):
                args = extract_multiline_args(lines, i)
                await self.run_command(statement.name, args.content, run)
                i = args.next_index
            elif isinstance(statement, GetOutput):
                if statement.var is not None:
                    run.context.set(statement.var, run.last_result)
                    self.debug(f"set {statement.var} = {run.last_result!r}", 3)
                i += 1
            elif isinstance(statement, SetId):
                if statement.agent_id is None or not run.pending_instruction:
                    raise FlowScriptError('setID called without a preceding createAI command.')
                run.agents[statement.agent_id] = run.pending_instruction
                run.pending_instruction = None
                self.workspace.log_action(f"Agent Registered: {statement.agent_id}")
                i += 1
            else:
                # flow expand, or a line that is not a statement
                i += 1

    async def run_command(self, name: str, raw_args: str, run: ScriptRun) -> None:
        await self.dispatch(parse_command(name, raw_args), run)

    async def dispatch(self, command: Command, run: ScriptRun) -> None:
        self.debug(f"command {command}")
        resolve = run.resolve

        if isinstance(command, Log):
            self.workspace.log_action(resolve(command.message))

        elif isinstance(command, CreateNote):
            title = resolve(command.title)
            if not title:
                raise CommandError(command.name, "createNote missing 'title'. Usage: createNote(title=\"...\", content=\"...\")")
            self.workspace.add_note(title, resolve(command.content or ''))

        elif isinstance(command, GetNote):
            title = resolve(command.title)
            content = self.workspace.get_note_content(title)
            if content is None:
                raise CommandError(command.name, f'Note not found: "{title}"')
            run.last_result = content

        elif isinstance(command, UpdateNote):
            title = resolve(command.title)
            content = resolve(command.content)
            if not title or not content:
                raise CommandError(command.name, "updateNote requires 'title' and 'content'")
            if not self.workspace.update_note_content(title, content):
                raise CommandError(command.name, f'Cannot update note. Note not found: "{title}"')

        elif isinstance(command, DeleteNote):
            title = resolve(command.title)
            if not self.workspace.delete_note_by_title(title):
                raise CommandError(command.name, f'Cannot delete note. Note not found: "{title}"')

        elif isinstance(command, UpdatePlan):
            task = resolve(command.task)
            status = resolve(command.status)
            if not task or not status:
                raise CommandError(command.name, "updatePlan requires 'task' and 'status'")
            if not self.workspace.update_plan_status(task, status):
                raise CommandError(command.name, f'Task not found in plan: "{task}"')

        elif isinstance(command, Execute):
            await self.run_python(command, run)

        elif isinstance(command, CreateAI):
            run.pending_instruction = resolve(command.instruction)

        elif isinstance(command, RunAI):
            if not command.prompt:
                raise CommandError(command.name, 'runAI requires a prompt.')
            response = await self.generator.generate(resolve(command.prompt))
            if response.startswith('Error'):
                raise CommandError(command.name, f"AI Generation Error: {response}")
            run.last_result = response

        elif isinstance(command, RunAgent):
            prompt = resolve(command.prompt)
            instruction = run.agents.get(command.agent_id)
            if not instruction:
                raise CommandError(command.name, f"Agent '{command.agent_id}' not defined. Use createAI then setID.")
            self.workspace.log_action(f"Agent {command.agent_id} is thinking...")
            response = await self.generator.generate(prompt, instruction)
            if response.startswith('Error'):
                raise CommandError(command.name, f"Agent '{command.agent_id}' Failed: {response}")
            run.last_result = response

        elif isinstance(command, SaveFile):
            name = resolve(command.file_name)
            url = resolve(command.url)
            if not name or not url:
                raise CommandError(command.name, "saveFile requires 'name' and 'url'")
            self.workspace.add_file(UserFile(name=name, url=url, type='binary'))
            run.last_result = 'File Saved'

        elif isinstance(command, DeleteFile):
            # TODO: raise like getFile/deleteNote once callers stop relying on the no-op
            self.workspace.delete_file(resolve(command.file_name))
            run.last_result = 'File Deleted'

        elif isinstance(command, GetFile):
            name = resolve(command.file_name)
            found = self.workspace.get_file(name)
            if found is None:
                raise CommandError(command.name, f"File '{name}' not found.")
            run.last_result = found.url

        elif isinstance(command, ChangeMusic):
            self.workspace.play_music(track_for_mood(resolve(command.mood)))

        else:
            raise CommandError(command.name, f"Unknown Command: {command.name}")

    # Python sandbox
    async def ensure_sandbox(self) -> Sandbox:
        if self.sandbox is None:
            raise CommandError('execute', 'Python engine not loaded. Check your sandbox configuration.')
        if not self.sandbox_ready:
            self.workspace.log_action('Booting Python Engine...')
            try:
                await self.sandbox.boot()
            except Exception as e:
                raise CommandError('execute', f"Failed to load Python Engine: {e}") from e
            self.sandbox_ready = True
        return self.sandbox

    def make_bridge(self, run: ScriptRun) -> HostBridge:
        def get_input(key: str) -> Any:
            if key in run.context:
                return run.context[key]
            return run.resolve(f"[{key}]")

        def set_output(key: str, value: Any) -> None:
            run.context[key] = value
            run.last_result = value
            self.debug(f"sandbox set {key} = {value!r}", 3)

        return HostBridge(get_input=get_input, set_output=set_output)

    async def run_python(self, command: Execute, run: ScriptRun) -> None:
        sandbox = await self.ensure_sandbox()
        code = run.resolve(command.code)
        try:
            run.last_result = await sandbox.run(code, self.make_bridge(run))
        except Exception as e:
            raise CommandError(command.name, f"Python Logic Error:\n{strip_error_prefix(str(e))}") from e


def run_script(source: str, prompt: str, generator: TextGenerator, workspace: Workspace,
               sandbox: Optional[Sandbox] = None, debug_level: int = 0) -> ScriptRun:
    """Convenience function to run a FlowScript script to completion."""
    with Interpreter(generator, workspace, sandbox, debug_level=debug_level) as interpreter:
        return asyncio.run(interpreter.execute_script(source, prompt))
