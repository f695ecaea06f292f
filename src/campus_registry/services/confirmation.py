"""
Confirmation capability used before destructive actions
"""

from abc import ABC, abstractmethod


class Confirmation(ABC):
    """Asks the user to approve an action"""

    @abstractmethod
    async def confirm(self, prompt: str) -> bool:
        """Return True only if the user approved ``prompt``"""


class FixedConfirmation(Confirmation):
    """Answer decided up front, e.g. from an explicit ``confirm`` request flag"""

    def __init__(self, answer: bool):
        self.answer = answer
        self.prompts = []

    async def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer


class DeclineConfirmation(FixedConfirmation):
    """Never approves; the default when nobody was asked"""

    def __init__(self):
        super().__init__(False)
