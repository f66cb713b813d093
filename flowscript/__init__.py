# FlowScript language package
# This package provides the parser and interpreter for FlowScript scripts.
from .interpreter import run_script, Interpreter, ScriptRun
from .errors import FlowScriptError, CommandError, SandboxError
from .parser import extract_blocks, extract_multiline_args, parse_statement
from .context import ExecutionContext, resolve_variables
from .arguments import parse_named_params, strip_quotes

__all__ = [
    'run_script',
    'Interpreter',
    'ScriptRun',
    'FlowScriptError',
    'CommandError',
    'SandboxError',
    'extract_blocks',
    'extract_multiline_args',
    'parse_statement',
    'ExecutionContext',
    'resolve_variables',
    'parse_named_params',
    'strip_quotes',
]
