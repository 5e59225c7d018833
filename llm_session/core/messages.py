"""
Conversation messages.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Role(str, Enum):
    """Author of a message."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single immutable conversation message."""
    role: Role
    content: str

    def __post_init__(self):
        if not isinstance(self.content, str):
            raise TypeError("content must be a string")
        # Accept plain role strings but always store the enum.
        object.__setattr__(self, "role", Role(self.role))

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(Role.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(Role.ASSISTANT, content)

    def to_dict(self) -> Dict[str, str]:
        """Wire representation sent to providers."""
        return {"role": self.role.value, "content": self.content}
