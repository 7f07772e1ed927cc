"""
LangChain chat-model completion client.

Sends the session history as structured messages instead of a flattened
prompt, with the wellness persona as the system message.
"""
import logging
from typing import Any, List

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ..exceptions import UpstreamError
from ..prompts import WELLNESS_SYSTEM_PROMPT
from ..sessions import Message, Role, TurnContext
from .base import CompletionClient, CompletionResult

logger = logging.getLogger(__name__)


def to_lc_messages(history: List[Message]) -> List[BaseMessage]:
    """Convert session messages to LangChain messages."""
    converted: List[BaseMessage] = []
    for message in history:
        if message.role == Role.ASSISTANT:
            converted.append(AIMessage(content=message.content))
        else:
            converted.append(HumanMessage(content=message.content))
    return converted


class ChatModelCompletionClient(CompletionClient):
    """
    Wraps any LangChain chat model (see llm_factory.get_llm_instance).
    
    :param llm: Chat model exposing invoke(messages)
    :param system_prompt: System message prepended to every request
    """
    
    def __init__(self, llm: Any, system_prompt: str = WELLNESS_SYSTEM_PROMPT):
        self._llm = llm
        self._system_prompt = system_prompt
    
    def has_credentials(self) -> bool:
        # llm_factory refuses to build a model without its API key
        return self._llm is not None
    
    def build_messages(self, turn: TurnContext) -> List[BaseMessage]:
        messages: List[BaseMessage] = [SystemMessage(content=self._system_prompt)]
        messages.extend(to_lc_messages(turn.history))
        messages.append(HumanMessage(content=turn.user_text))
        return messages
    
    def complete(self, turn: TurnContext) -> CompletionResult:
        messages = self.build_messages(turn)
        logger.info(
            f"Invoking chat model (session={turn.session_id}, "
            f"history_messages={len(turn.history)})"
        )
        try:
            result = self._llm.invoke(messages)
        except Exception as e:
            raise UpstreamError(f"Chat model call failed: {e}") from e
        
        answer = getattr(result, "content", result)
        if not isinstance(answer, str):
            answer = str(answer) if answer is not None else None
        return CompletionResult(answer=answer, raw={})
