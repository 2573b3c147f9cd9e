from abc import ABC, abstractmethod


class ITokenIssuer(ABC):
    @abstractmethod
    def issue(self, username: str) -> str:
        """Returns a signed, time-bounded token bound to the username. Raises TokenIssueError on failure."""
