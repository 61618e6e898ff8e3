"""Built-in configuration defaults and the first-run config file template."""

CONFIG_HEADER = """\
# CCM configuration file
# Replace the placeholders with your real API keys.
# Note: API keys already set in the environment take precedence over this file.
"""

OVERRIDES_MARKER = "# ---- CCM model ID overrides (auto-added) ----"

# Provider API keys, shipped as obvious placeholders.
API_KEY_PLACEHOLDERS: dict[str, str] = {
    "DEEPSEEK_API_KEY": "sk-your-deepseek-api-key",
    "GLM_API_KEY": "your-glm-api-key",
    "KIMI_API_KEY": "your-kimi-api-key",
    "LONGCAT_API_KEY": "your-longcat-api-key",
    "MINIMAX_API_KEY": "your-minimax-api-key",
    "ARK_API_KEY": "your-ark-api-key",
    "QWEN_API_KEY": "your-qwen-api-key",
    "KAT_API_KEY": "your-kat-api-key",
    "CLAUDE_API_KEY": "your-claude-api-key",
}

# Model ID overrides with real working defaults.
MODEL_OVERRIDE_DEFAULTS: dict[str, str] = {
    "DEEPSEEK_MODEL": "deepseek-chat",
    "DEEPSEEK_SMALL_FAST_MODEL": "deepseek-chat",
    "KIMI_MODEL": "kimi-for-coding",
    "KIMI_SMALL_FAST_MODEL": "kimi-for-coding",
    "KIMI_CN_MODEL": "kimi-k2-thinking",
    "KIMI_CN_SMALL_FAST_MODEL": "kimi-k2-thinking",
    "KAT_MODEL": "KAT-Coder",
    "KAT_SMALL_FAST_MODEL": "KAT-Coder",
    "KAT_ENDPOINT_ID": "ep-default",
    "LONGCAT_MODEL": "LongCat-Flash-Thinking",
    "LONGCAT_SMALL_FAST_MODEL": "LongCat-Flash-Chat",
    "MINIMAX_MODEL": "MiniMax-M2",
    "MINIMAX_SMALL_FAST_MODEL": "MiniMax-M2",
    "SEED_MODEL": "doubao-seed-code-preview-latest",
    "SEED_SMALL_FAST_MODEL": "doubao-seed-code-preview-latest",
    "QWEN_MODEL": "qwen3-max",
    "QWEN_SMALL_FAST_MODEL": "qwen3-next-80b-a3b-instruct",
    "GLM_MODEL": "glm-4.6",
    "GLM_SMALL_FAST_MODEL": "glm-4.5-air",
    "CLAUDE_MODEL": "claude-sonnet-4-5-20250929",
    "CLAUDE_SMALL_FAST_MODEL": "claude-sonnet-4-5-20250929",
    "OPUS_MODEL": "claude-opus-4-5-20251101",
    "OPUS_SMALL_FAST_MODEL": "claude-sonnet-4-5-20250929",
    "HAIKU_MODEL": "claude-haiku-4-5",
    "HAIKU_SMALL_FAST_MODEL": "claude-haiku-4-5",
}

BUILTIN_DEFAULTS: dict[str, str] = {
    **API_KEY_PLACEHOLDERS,
    **MODEL_OVERRIDE_DEFAULTS,
}


def render_default_config() -> str:
    """Render the content written to a freshly bootstrapped config file."""
    lines = [CONFIG_HEADER]
    lines.append("# Provider API keys")
    lines.extend(f"{key}={value}" for key, value in API_KEY_PLACEHOLDERS.items())
    lines.append("")
    lines.append("# Optional: model ID overrides (defaults below are used when unset)")
    lines.extend(f"{key}={value}" for key, value in MODEL_OVERRIDE_DEFAULTS.items())
    return "\n".join(lines) + "\n"
