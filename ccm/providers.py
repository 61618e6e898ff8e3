"""Static provider table and shell export generation for model switching."""

import shlex
from dataclasses import dataclass, field

from .config.models import ConfigSnapshot
from .errors import ConfigMissing

ANTHROPIC_VARS = (
    "ANTHROPIC_BASE_URL",
    "ANTHROPIC_API_URL",
    "ANTHROPIC_AUTH_TOKEN",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "ANTHROPIC_SMALL_FAST_MODEL",
    "API_TIMEOUT_MS",
    "CLAUDE_CODE_DISABLE_NONESSENTIAL_TRAFFIC",
)


@dataclass(frozen=True)
class ProviderProfile:
    """How to point Claude Code at one provider."""
    name: str
    display_name: str
    model_key: str
    small_model_key: str
    api_key_var: str | None = None
    base_url: str | None = None
    timeout_ms: str = "600000"
    aliases: tuple[str, ...] = ()
    extra_exports: dict[str, str] = field(default_factory=dict)

    @property
    def needs_api_key(self) -> bool:
        return self.api_key_var is not None


PROVIDERS: dict[str, ProviderProfile] = {
    profile.name: profile
    for profile in (
        ProviderProfile(
            name="deepseek", display_name="Deepseek",
            api_key_var="DEEPSEEK_API_KEY", base_url="https://api.deepseek.com/anthropic",
            model_key="DEEPSEEK_MODEL", small_model_key="DEEPSEEK_SMALL_FAST_MODEL",
            aliases=("ds",),
        ),
        ProviderProfile(
            name="kimi", display_name="KIMI for Coding",
            api_key_var="KIMI_API_KEY", base_url="https://api.kimi.com/coding/",
            model_key="KIMI_MODEL", small_model_key="KIMI_SMALL_FAST_MODEL",
            aliases=("kimi2",),
        ),
        ProviderProfile(
            name="kimi-cn", display_name="KIMI CN",
            api_key_var="KIMI_API_KEY", base_url="https://api.moonshot.cn/anthropic",
            model_key="KIMI_CN_MODEL", small_model_key="KIMI_CN_SMALL_FAST_MODEL",
        ),
        ProviderProfile(
            name="qwen", display_name="Qwen (Alibaba DashScope)",
            api_key_var="QWEN_API_KEY",
            base_url="https://dashscope.aliyuncs.com/api/v2/apps/claude-code-proxy",
            model_key="QWEN_MODEL", small_model_key="QWEN_SMALL_FAST_MODEL",
        ),
        ProviderProfile(
            name="glm", display_name="GLM 4.6",
            api_key_var="GLM_API_KEY", base_url="https://api.z.ai/api/anthropic",
            model_key="GLM_MODEL", small_model_key="GLM_SMALL_FAST_MODEL",
            timeout_ms="3000000", aliases=("glm4", "glm4.6"),
            extra_exports={
                "ANTHROPIC_DEFAULT_HAIKU_MODEL": "glm-4.5-air",
                "ANTHROPIC_DEFAULT_SONNET_MODEL": "glm-4.6",
                "ANTHROPIC_DEFAULT_OPUS_MODEL": "glm-4.6",
            },
        ),
        ProviderProfile(
            name="longcat", display_name="LongCat",
            api_key_var="LONGCAT_API_KEY", base_url="https://api.longcat.chat/anthropic",
            model_key="LONGCAT_MODEL", small_model_key="LONGCAT_SMALL_FAST_MODEL",
            aliases=("lc",),
        ),
        ProviderProfile(
            name="minimax", display_name="MiniMax M2",
            api_key_var="MINIMAX_API_KEY", base_url="https://api.minimax.io/anthropic",
            model_key="MINIMAX_MODEL", small_model_key="MINIMAX_SMALL_FAST_MODEL",
            aliases=("mm",),
        ),
        ProviderProfile(
            name="seed", display_name="Doubao Seed-Code",
            api_key_var="ARK_API_KEY", base_url="https://ark.cn-beijing.volces.com/api/coding",
            model_key="SEED_MODEL", small_model_key="SEED_SMALL_FAST_MODEL",
            timeout_ms="3000000", aliases=("doubao",),
        ),
        ProviderProfile(
            name="kat", display_name="StreamLake AI (KAT)",
            api_key_var="KAT_API_KEY",
            base_url="https://vanchin.streamlake.ai/api/gateway/v1/endpoints/{endpoint_id}/claude-code-proxy",
            model_key="KAT_MODEL", small_model_key="KAT_SMALL_FAST_MODEL",
        ),
        ProviderProfile(
            name="claude", display_name="Claude Sonnet 4.5",
            model_key="CLAUDE_MODEL", small_model_key="CLAUDE_SMALL_FAST_MODEL",
            aliases=("sonnet", "s"),
        ),
        ProviderProfile(
            name="opus", display_name="Claude Opus 4.5",
            model_key="OPUS_MODEL", small_model_key="OPUS_SMALL_FAST_MODEL",
            aliases=("o",),
        ),
        ProviderProfile(
            name="haiku", display_name="Claude Haiku 4.5",
            model_key="HAIKU_MODEL", small_model_key="HAIKU_SMALL_FAST_MODEL",
            aliases=("h",),
        ),
    )
}

_ALIASES: dict[str, str] = {
    alias: profile.name
    for profile in PROVIDERS.values()
    for alias in (profile.name, *profile.aliases)
}


def get_provider(name: str) -> ProviderProfile | None:
    """Look up a provider by name or alias."""
    canonical = _ALIASES.get(name.lower())
    return PROVIDERS.get(canonical) if canonical else None


def provider_names() -> list[str]:
    return list(PROVIDERS)


def _export(key: str, value: str) -> str:
    return f"export {key}={shlex.quote(value)}"


def build_exports(profile: ProviderProfile, snapshot: ConfigSnapshot) -> list[str]:
    """Shell lines that switch Claude Code to ``profile``.

    Raises:
        ConfigMissing: the provider's API key is not effectively set.
    """
    lines = ["unset " + " ".join(ANTHROPIC_VARS)]
    model = snapshot.get(profile.model_key, "")
    small_model = snapshot.get(profile.small_model_key, model)

    if not profile.needs_api_key:
        lines.append(_export("ANTHROPIC_MODEL", model))
        lines.append(_export("ANTHROPIC_SMALL_FAST_MODEL", small_model))
        return lines

    api_key = snapshot.require(profile.api_key_var)
    base_url = profile.base_url.format(endpoint_id=snapshot.get("KAT_ENDPOINT_ID", "ep-default"))

    lines.extend([
        _export("API_TIMEOUT_MS", profile.timeout_ms),
        _export("CLAUDE_CODE_DISABLE_NONESSENTIAL_TRAFFIC", "1"),
        _export("ANTHROPIC_BASE_URL", base_url),
        _export("ANTHROPIC_API_URL", base_url),
        _export("ANTHROPIC_AUTH_TOKEN", api_key),
        _export("ANTHROPIC_MODEL", model),
        _export("ANTHROPIC_SMALL_FAST_MODEL", small_model),
    ])
    lines.extend(_export(key, value) for key, value in profile.extra_exports.items())
    return lines
