"""CLI entry point for the FlowScript interpreter.

Usage:
    python -m flowscript [-v|-vv|-vvv] <script_file> [--prompt TEXT]
    python -m flowscript [-v...] <script_file> --prompt-file PROMPT_FILE

Options:
  -v             Increase debug verbosity (can be repeated)
  --prompt       Text bound to [prompt] inside the script
  --prompt-file  Read the prompt text from a file
  --model        Gemini model name (defaults to $FLOWSCRIPT_MODEL)
  --plan         Seed the in-memory plan with a task (can be repeated)

The script runs against an in-memory workspace, the Gemini API (when
GEMINI_API_KEY is set, e.g. in a .env file) and an in-process Python
sandbox. Debug information is written to `debug.txt` in the current
directory when verbosity is greater than zero. The final answer is
printed to stdout; a failed run prints its error to stderr and exits
with status 1.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from .config import Settings
from .interpreter import Interpreter
from .std.genai import GeminiGenerator, MissingKeyGenerator
from .std.sandbox import PythonSandbox
from .std.workspace import InMemoryWorkspace


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="FlowScript interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--prompt', default='', help='prompt text available to the script as [prompt]')
    group.add_argument('--prompt-file', metavar='PROMPT_FILE', help='read the prompt text from a file')
    parser.add_argument('--model', help='Gemini model name')
    parser.add_argument('--plan', action='append', default=[], metavar='TASK', help='add a plan step (can be repeated)')
    parser.add_argument('script', help='FlowScript file (.flow) to execute')
    args = parser.parse_args(argv)

    script_file = Path(args.script)
    if not script_file.exists():
        print(f"Error: file {script_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(script_file, 'r', encoding='utf-8') as f:
        source = f.read()

    prompt = args.prompt
    if args.prompt_file:
        prompt_file = Path(args.prompt_file)
        if not prompt_file.exists():
            print(f"Error: file {prompt_file} not found", file=sys.stderr)
            sys.exit(1)
        with open(prompt_file, 'r', encoding='utf-8') as f:
            prompt = f.read()

    settings = Settings.from_env()
    if settings.api_key:
        generator = GeminiGenerator(api_key=settings.api_key, model=args.model or settings.model)
    else:
        generator = MissingKeyGenerator()
    workspace = InMemoryWorkspace(plan=args.plan)

    with Interpreter(generator, workspace, PythonSandbox(), debug_level=args.v) as interpreter:
        run = asyncio.run(interpreter.execute_script(source, prompt))

    if run.error is not None:
        print(f"Runtime error: {run.error}", file=sys.stderr)
        sys.exit(1)
    for message in workspace.messages:
        if message.type == 'text':
            print(message.text)


if __name__ == '__main__':
    main()
