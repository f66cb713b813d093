"""Syntax tree definitions for FlowScript.

A script is split into named blocks, and each block is a sequence of
lines. The statement classes below describe what a single line starts;
multi-line constructs (nested override blocks, calls whose arguments
span several lines) are completed by the statement runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Blocks:
    """Top-level sections of a script; ``None`` marks an absent block."""
    before_prompt: Optional[str] = None
    prompt: Optional[str] = None
    override_prompt: Optional[str] = None
    after_prompt: Optional[str] = None


@dataclass
class Statement:
    """Base class for all statements."""
    pass


@dataclass
class OverrideStart(Statement):
    pass


@dataclass
class AgentCall(Statement):
    agent_id: str


@dataclass
class CommandCall(Statement):
    name: str


@dataclass
class GetOutput(Statement):
    var: Optional[str]  # None when no quoted name follows


@dataclass
class SetId(Statement):
    agent_id: Optional[str]


@dataclass
class FlowExpand(Statement):
    pass
