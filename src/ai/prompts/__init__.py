"""Prompts do assistente de formulário.

Texto do prompt em ai/prompts/yaml/form_assist.yaml; montagem em
form_assist_prompt.py.
"""

from ai.prompts.form_assist_prompt import (
    FORM_ASSIST_SYSTEM_PROMPT,
    build_form_assist_system_prompt,
    format_form_assist_prompt,
)

__all__ = [
    "FORM_ASSIST_SYSTEM_PROMPT",
    "build_form_assist_system_prompt",
    "format_form_assist_prompt",
]
