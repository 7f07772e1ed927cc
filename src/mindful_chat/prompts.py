"""
Prompt text for the wellness companion.

Wording is a product choice; the structure (history block, then the current
question) is what the upstream model relies on.
"""
from typing import Optional

WELLNESS_SYSTEM_PROMPT = """You are a warm, supportive mental-wellness companion.

GUIDELINES:
- Listen first; reflect back what the user shares before offering ideas
- Offer gentle, practical coping techniques (breathing, grounding, journaling)
- Keep responses concise and conversational
- Never diagnose or prescribe medication
- If the user mentions self-harm or being in danger, encourage them to contact
  local emergency services or a crisis line right away"""

HISTORY_HEADER = "Previous conversation:"
CURRENT_QUESTION_LABEL = "Current question:"


def build_contextual_prompt(
    user_text: str,
    history: str = "",
    preamble: Optional[str] = None,
) -> str:
    """
    Assemble the outbound prompt.
    
    :param user_text: The current user message
    :param history: Rendered prior messages; empty on a session's first turn
    :param preamble: Optional persona text placed before everything else
    :return: Prompt string
    """
    if history:
        prompt = f"{HISTORY_HEADER}\n{history}\n\n{CURRENT_QUESTION_LABEL} {user_text}"
    else:
        prompt = user_text
    
    if preamble:
        prompt = f"{preamble.strip()}\n\n{prompt}"
    return prompt
