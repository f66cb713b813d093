"""Argument helpers shared by the statement runner and the dispatcher."""

import re
from typing import Dict


TRIPLE_QUOTED_PARAM = re.compile(r'(\w+)\s*=\s*"""([\s\S]*?)"""(?!")')
QUOTED_PARAM = re.compile(r'(\w+)\s*=\s*"([^"]*)"')


def parse_named_params(text: str) -> Dict[str, str]:
    """Parse ``key="value"`` and ``key=\"\"\"value\"\"\"`` pairs.

    Triple-quoted values are collected first and win over a single-quoted
    match for the same key, so they may hold quotes and newlines. A
    value may end with a quote: the closing ``\"\"\"`` is the last three
    quotes of a run. Text that is not part of a pair is ignored.
    """
    result: Dict[str, str] = {}
    if not text:
        return result
    for match in TRIPLE_QUOTED_PARAM.finditer(text):
        result[match.group(1)] = match.group(2)
    remaining = TRIPLE_QUOTED_PARAM.sub('', text)
    for match in QUOTED_PARAM.finditer(remaining):
        if match.group(1) not in result:
            result[match.group(1)] = match.group(2)
    return result


def strip_quotes(text: str) -> str:
    s = (text or '').strip()
    if len(s) >= 6 and s.startswith('"""') and s.endswith('"""'):
        return s[3:-3]
    if len(s) >= 2 and s.startswith('"') and s.endswith('"'):
        return s[1:-1]
    return s
