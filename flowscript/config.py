import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .std.genai import DEFAULT_MODEL


@dataclass
class Settings:
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> 'Settings':
        """Read settings from the environment, after loading a ``.env`` file if present."""
        if load_dotenv_file:
            load_dotenv()
        return cls(
            api_key=os.environ.get('GEMINI_API_KEY') or None,
            model=os.environ.get('FLOWSCRIPT_MODEL') or DEFAULT_MODEL,
        )
