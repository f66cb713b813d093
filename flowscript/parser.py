"""Parser for the FlowScript language.

FlowScript is parsed in two layers:

1. **Block extraction**: the raw script is split into its top-level
   sections (``beforePrompt``, ``Prompt``, ``overridePrompt`` and
   ``afterPrompt``) with case-insensitive, non-greedy delimiter matching.
   A bare ``pass Prompt`` directive anywhere in the script disables the
   ``Prompt`` block.

2. **Statement classification**: each line of a block is fed to a Lark
   parser configured with a small grammar describing what a line can
   start with. The parse tree is transformed into a statement node from
   :mod:`flowscript.ast`. Lines the grammar rejects are not statements
   and yield ``None``.

Calls may spread their arguments over several lines;
:func:`extract_multiline_args` collects them by balancing parentheses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput

from .ast import (
    Blocks, Statement, OverrideStart, AgentCall, CommandCall,
    GetOutput, SetId, FlowExpand,
)


BLOCK_NAMES = ('beforePrompt', 'Prompt', 'overridePrompt', 'afterPrompt')

BLOCK_PATTERNS: Dict[str, 're.Pattern[str]'] = {
    name: re.compile(rf'start\s+{name}([\s\S]*?)end\s+{name}', re.IGNORECASE)
    for name in BLOCK_NAMES
}

PASS_PROMPT_PATTERN = re.compile(r'pass\s+Prompt', re.IGNORECASE)
QUOTED_NAME_PATTERN = re.compile(r'"([^"]+)"')


def normalize_newlines(source: str) -> str:
    return source.replace('\r\n', '\n')


def _interior(match: Optional['re.Match[str]']) -> Optional[str]:
    return match.group(1).strip() if match else None


def _mask_spans(content: str, matches: Iterable['re.Match[str]']) -> str:
    """Blank out the given spans, keeping every other offset in place."""
    chars = list(content)
    for match in matches:
        for i in range(match.start(), match.end()):
            if chars[i] != '\n':
                chars[i] = ' '
    return ''.join(chars)


def extract_blocks(source: str) -> Blocks:
    """Split a script into its top-level blocks.

    Only a top-level ``overridePrompt`` is returned here: the bodies of
    ``beforePrompt`` and ``afterPrompt`` are masked before searching for
    it, so an override nested inside them is left for the statement
    runner to apply when it reaches that line.
    """
    content = normalize_newlines(source or '')
    before = BLOCK_PATTERNS['beforePrompt'].search(content)
    after = BLOCK_PATTERNS['afterPrompt'].search(content)
    top_level = _mask_spans(content, [m for m in (before, after) if m])

    pass_prompt = PASS_PROMPT_PATTERN.search(content) is not None
    return Blocks(
        before_prompt=_interior(before),
        prompt=None if pass_prompt else _interior(BLOCK_PATTERNS['Prompt'].search(content)),
        override_prompt=_interior(BLOCK_PATTERNS['overridePrompt'].search(top_level)),
        after_prompt=_interior(after),
    )


FLOWSCRIPT_LINE_GRAMMAR = r"""
    start: override_start
         | agent_call
         | command_call
         | get_output
         | set_id
         | flow_expand

    override_start: _OVERRIDE_START REST?
    agent_call: _RUN_AI_AS NAME _OPEN REST?
    command_call: NAME _OPEN REST?
    get_output: _GET_OUTPUT_AS REST
    set_id: _SET_ID_AS REST
    flow_expand: _FLOW_EXPAND REST?

    _OVERRIDE_START: /start\s+overridePrompt/i
    _RUN_AI_AS: /runAI\s+as\s+/i
    _GET_OUTPUT_AS: /getOutput\s+as\s+/i
    _SET_ID_AS: /setID\s+as\s+/i
    _FLOW_EXPAND: /flow\s+expand/i
    _OPEN: /\s*\(/
    NAME: /\w+/
    REST: /.+/s
"""


FLOWSCRIPT_LINE_PARSER = Lark(
    FLOWSCRIPT_LINE_GRAMMAR,
    parser='earley',
    lexer='dynamic',
)


def _leading_quoted(rest: str) -> Optional[str]:
    match = QUOTED_NAME_PATTERN.match(rest)
    return match.group(1) if match else None


class StatementTransformer(Transformer):
    """Transforms a line parse tree into a statement node."""

    def start(self, items):
        return items[0]

    def override_start(self, items):
        return OverrideStart()

    def agent_call(self, items):
        return AgentCall(agent_id=str(items[0]))

    def command_call(self, items):
        return CommandCall(name=str(items[0]))

    def get_output(self, items):
        return GetOutput(var=_leading_quoted(str(items[0])))

    def set_id(self, items):
        return SetId(agent_id=_leading_quoted(str(items[0])))

    def flow_expand(self, items):
        return FlowExpand()


def parse_statement(line: str) -> Optional[Statement]:
    """Classify a single trimmed line, or return ``None`` if it is not a statement."""
    if not line:
        return None
    try:
        tree = FLOWSCRIPT_LINE_PARSER.parse(line)
    except UnexpectedInput:
        return None
    return StatementTransformer().transform(tree)


def is_override_end(line: str) -> bool:
    return re.match(r'end\s+overridePrompt', line.strip(), re.IGNORECASE) is not None


@dataclass
class MultilineArgs:
    content: str
    next_index: int


def extract_multiline_args(lines: List[str], start_index: int) -> MultilineArgs:
    """Collect the arguments of a call that may span several lines.

    Lines are appended while the number of ``(`` exceeds the number of
    ``)``. The content is the text between the first ``(`` and the last
    ``)``; if no closing parenthesis follows the opening one, it runs to
    the end of the collected text.
    """
    current = start_index
    buffer = lines[start_index]
    open_count = buffer.count('(')
    close_count = buffer.count(')')
    while close_count < open_count and current < len(lines) - 1:
        current += 1
        next_line = lines[current]
        buffer += '\n' + next_line
        open_count += next_line.count('(')
        close_count += next_line.count(')')

    first_paren = buffer.find('(')
    last_paren = buffer.rfind(')')
    if last_paren < first_paren:
        content = buffer[first_paren + 1:]
    else:
        content = buffer[first_paren + 1:last_paren]
    return MultilineArgs(content=content, next_index=current + 1)
