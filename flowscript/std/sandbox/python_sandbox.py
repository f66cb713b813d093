"""In-process Python sandbox for the ``execute`` command.

User code is wrapped in an async entry point before it runs::

    async def main():
        <user code, indented by four spaces>

``main()`` is awaited and its return value becomes the command's
result, so the code may use ``await`` and ``return`` at its top level.
Modules the code imports are loaded before the run. The namespace
exposes ``fs``, an object with ``get_input(key)``, ``set_output(key,
value)`` and its alias ``set_var``, which call back into the running
script. Any failure is raised as :class:`SandboxError` with a
``PythonError:`` prefix.
"""

import ast
import asyncio
import builtins
import importlib
import logging
import textwrap
import traceback
from typing import Any, Dict, List, Optional

from flowscript.errors import SandboxError
from flowscript.host import HostBridge

logger = logging.getLogger('flowscript.sandbox')

ENTRY_POINT = 'main'


def wrap_code(code: str) -> str:
    return f"async def {ENTRY_POINT}():\n{textwrap.indent(code, '    ')}\n"


def find_imports(source: str) -> List[str]:
    """Top-level module names imported anywhere in ``source``."""
    names: List[str] = []
    for node in ast.walk(ast.parse(source)):
        if isinstance(node, ast.Import):
            candidates = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            candidates = [node.module]
        else:
            continue
        for candidate in candidates:
            top = candidate.split('.')[0]
            if top not in names:
                names.append(top)
    return names


def describe_error(exc: BaseException) -> str:
    return ''.join(traceback.format_exception_only(type(exc), exc)).strip()


class FlowScriptInterface:
    """The ``fs`` object visible to user code."""
    def __init__(self, bridge: HostBridge):
        self._bridge = bridge

    def get_input(self, key: str) -> Any:
        return self._bridge.get_input(key)

    def set_output(self, key: str, value: Any) -> None:
        self._bridge.set_output(key, value)

    def set_var(self, key: str, value: Any) -> None:
        self.set_output(key, value)


class PythonSandbox:
    def __init__(self):
        self.base_globals: Optional[Dict[str, Any]] = None
        self.loaded_modules: Dict[str, Any] = {}

    @property
    def ready(self) -> bool:
        return self.base_globals is not None

    async def boot(self) -> None:
        if self.ready:
            return
        self.base_globals = {'__builtins__': builtins, '__name__': '__flowscript__'}
        logger.debug('python sandbox ready')

    def load_packages_from_imports(self, source: str) -> None:
        for name in find_imports(source):
            if name not in self.loaded_modules:
                self.loaded_modules[name] = importlib.import_module(name)
                logger.debug('loaded module %s', name)

    async def run(self, code: str, bridge: HostBridge) -> Any:
        await self.boot()
        wrapped = wrap_code(code)
        namespace = dict(self.base_globals)
        namespace['fs'] = FlowScriptInterface(bridge)
        try:
            self.load_packages_from_imports(wrapped)
            exec(compile(wrapped, '<flowscript>', 'exec'), namespace)
            return await namespace[ENTRY_POINT]()
        except (KeyboardInterrupt, asyncio.CancelledError):
            raise
        except BaseException as e:
            raise SandboxError(describe_error(e)) from e
