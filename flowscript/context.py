import re
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from flowscript.types import MISSING, ContextValue, decode_json, descend, to_string


VARIABLE_PATTERN = re.compile(r'\[([\w.]+)\]')


class ExecutionContext:
    """Mutable key/value store threaded through one script run."""
    def __init__(self, prompt: str = '', answer: str = '', values: Optional[Dict[str, ContextValue]] = None):
        self.values: Dict[str, ContextValue] = {'prompt': prompt, 'answer': answer}
        if values:
            self.values.update(values)

    @property
    def answer(self) -> str:
        value = self.values.get('answer', '')
        return '' if value is None else to_string(value)

    @answer.setter
    def answer(self, value: str):
        self.values['answer'] = value

    def get(self, name: str, default: Any = MISSING) -> Any:
        return self.values.get(name, default)

    def set(self, name: str, value: ContextValue):
        self.values[name] = value

    def lookup(self, path: str) -> Any:
        """Resolve a dotted path such as ``meta.title``.

        The head of the path is read from the context. When more segments
        follow and the head is a JSON-looking string, it is parsed first.
        A ``None`` reached midway stops the descent and is returned as is.
        """
        parts = path.split('.')
        value = self.values.get(parts[0], MISSING)
        if len(parts) > 1:
            value = decode_json(value)
        for part in parts[1:]:
            if value is MISSING or value is None:
                break
            value = descend(value, part)
        return value

    def resolve(self, text: Optional[str]) -> str:
        if not text:
            return ''

        def replace(match: 're.Match[str]') -> str:
            value = self.lookup(match.group(1))
            if value is MISSING:
                return match.group(0)
            return to_string(value)

        return VARIABLE_PATTERN.sub(replace, text)

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def __setitem__(self, name: str, value: ContextValue):
        self.values[name] = value

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __repr__(self) -> str:
        return f"ExecutionContext({self.values!r})"


def resolve_variables(text: Optional[str], context: Union[ExecutionContext, Mapping[str, Any]]) -> str:
    """Replace every ``[name.path]`` token in ``text`` with its value.

    Tokens that do not resolve are left untouched.
    """
    if not isinstance(context, ExecutionContext):
        wrapped = ExecutionContext()
        wrapped.values = dict(context)
        context = wrapped
    return context.resolve(text)
