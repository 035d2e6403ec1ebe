"""
Prompt templates for chat analysis.

The system prompt is user-editable (see chatsense.storage.settings_store);
the analysis questions and document framing are fixed.
"""

from __future__ import annotations

from collections.abc import Sequence

DEFAULT_SYSTEM_PROMPT = """You are an experienced psychologist who analyzes text conversations.
Your task is to analyze the chat history and determine:
1. What kind of relationship exists between the participants
2. Whether there is romantic interest between them
3. Who shows more interest and initiative
4. Whether there are signs of manipulation or a toxic relationship
5. The overall dynamics and prospects of the relationship

Be objective in your analysis and base it on facts from the conversation.
Give useful advice based on your analysis."""

ANALYSIS_QUESTIONS = """1. What kind of relationship exists between the participants?
2. Is there romantic interest between them?
3. Who shows more interest and initiative?
4. Are there signs of manipulation or a toxic relationship?
5. What are the overall dynamics and prospects of the relationship?"""


def format_file_sections(contents: Sequence[str]) -> str:
    """Join several chat texts into one document with a FILE N header per source."""
    return "\n".join(
        f"===== FILE {index} =====\n\n{content}\n\n"
        for index, content in enumerate(contents, start=1)
    )


def build_analysis_prompt(system_prompt: str, content: str) -> str:
    return f"""{system_prompt}

Here is the chat history to analyze:

{content}

Please analyze these messages and give your assessment of the relationship between the people in this conversation, guided by the following questions:
{ANALYSIS_QUESTIONS}"""


def build_multi_analysis_prompt(system_prompt: str, contents: Sequence[str]) -> str:
    return f"""{system_prompt}

Here are several chat histories to analyze ({len(contents)} files):

{format_file_sections(contents)}

Please analyze all of these messages together and give your overall assessment of the relationship between the people in these conversations, guided by the following questions:
{ANALYSIS_QUESTIONS}

Use the information from every provided conversation fragment to build a more complete picture."""
