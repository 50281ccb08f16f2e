from enum import Enum
from functools import cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(Enum):
    LOCAL = "local"
    DEV = "dev"
    PROD = "prod"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: Environment = Environment.LOCAL
    LOG_LEVEL: str = "DEBUG"

    # Agent execution hard timeout
    AGENT_TIMEOUT_SECONDS: int = 60 * 60  # 1 hour

    DEFAULT_MODEL: str = "gemini/gemini-2.5-flash"

    # xibo-server MCP endpoint (streamable HTTP)
    XIBO_MCP_URL: str = "http://localhost:4111/mcp/"
    XIBO_MCP_AUTH_TOKEN: str | None = None

    # External file/process control MCP server, launched over stdio
    EXTERNAL_MCP_NAME: str = "desktop-commander"
    EXTERNAL_MCP_COMMAND: str = "npx"
    EXTERNAL_MCP_ARGS: str = "-y,@wonderwhy-er/desktop-commander"

    # LiteLLM Proxy
    # If set, all LLM requests will be routed through the proxy
    LITELLM_PROXY_API_BASE: str | None = None
    LITELLM_PROXY_API_KEY: str | None = None

    @property
    def external_mcp_args(self) -> list[str]:
        return [arg.strip() for arg in self.EXTERNAL_MCP_ARGS.split(",") if arg.strip()]


@cache
def get_settings() -> Settings:
    return Settings()
