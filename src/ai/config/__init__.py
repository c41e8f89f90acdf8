"""Configuração de IA: loader de assets YAML de prompt."""

from ai.config.prompt_assets_loader import (
    PromptAssetError,
    clear_prompt_assets_cache,
    load_prompt_template,
    load_prompt_yaml,
    load_system_prompt,
)

__all__ = [
    "PromptAssetError",
    "clear_prompt_assets_cache",
    "load_prompt_template",
    "load_prompt_yaml",
    "load_system_prompt",
]
