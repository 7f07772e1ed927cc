"""
Completion client protocol.

Same pattern as the session layer: callers depend on this ABC, concrete
clients are injected at the composition root.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..sessions import TurnContext


@dataclass
class CompletionResult:
    """Answer from the upstream model plus whatever else it returned."""
    answer: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict)


class CompletionClient(ABC):
    """
    Protocol for upstream completion services.
    
    Clients must NOT touch session state; they only turn a TurnContext into
    an answer.
    """
    
    @abstractmethod
    def has_credentials(self) -> bool:
        """Whether the client has what it needs to authenticate."""
        pass
    
    @abstractmethod
    def complete(self, turn: TurnContext) -> CompletionResult:
        """
        Request a completion for one turn.
        
        :param turn: Prompt and history from TurnProcessor.handle_turn
        :return: CompletionResult (answer may be None or empty)
        :raises UpstreamError: On transport failure or non-success response
        """
        pass
    
    def close(self) -> None:
        """Release connections or other resources. Default: nothing to do."""
        pass
