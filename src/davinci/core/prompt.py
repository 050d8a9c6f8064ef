"""Prompt assembly from caller context and question."""

from __future__ import annotations

DEFAULT_PROMPT_TEMPLATE = "{context}{question}"

# Chat framing used by the first releases of this library.
DIALOGUE_PROMPT_TEMPLATE = "{context}.\nH: {question}.\nIA:"


def build_prompt(context: str, question: str, template: str = DEFAULT_PROMPT_TEMPLATE) -> str:
    """Join context and question through ``template``.

    The default is plain concatenation; any separator is the caller's job.
    Braces inside ``context`` or ``question`` are inserted literally.
    """
    return template.format(context=context, question=question)
