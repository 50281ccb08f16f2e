from enum import Enum
from functools import cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(Enum):
    LOCAL = "local"
    DEV = "dev"
    PROD = "prod"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: Environment = Environment.LOCAL
    LOG_LEVEL: str = "DEBUG"
    LOG_FILE: str | None = None

    # Xibo CMS (OAuth2 client credentials)
    CMS_URL: str | None = None
    XIBO_CLIENT_ID: str | None = None
    XIBO_CLIENT_SECRET: str | None = None
    CMS_TIMEOUT_SECONDS: float = 30.0
    # Refresh the bearer token this long before the CMS says it expires
    TOKEN_EXPIRY_MARGIN_SECONDS: int = 60

    # Google services
    GEMINI_API_KEY: str | None = None
    GOOGLE_FONTS_API_KEY: str | None = None
    GOOGLE_CLOUD_PROJECT: str | None = None
    IMAGE_GENERATION_MODEL: str = "gemini/imagen-4.0-generate-001"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Public base of the /ext-api routes; the workflow server lives next to it
    EXT_API_URL: str = "http://localhost:4111/ext-api"
    WORKFLOW_API_URL: str | None = None

    # Local storage
    PERSISTENT_DATA_DIR: Path = Path("persistent_data")

    # Upload limits
    MAX_FILE_SIZE: int = 4 * 1024 * 1024 * 1024  # 4 GB
    ALLOWED_IMAGE_TYPES: str = (
        "image/jpeg,image/png,image/bmp,image/gif,image/webp,image/svg+xml"
    )
    ALLOWED_IMAGE_EXTENSIONS: str = ".jpg,.jpeg,.png,.bmp,.gif,.webp,.svg"
    ALLOWED_VIDEO_TYPES: str = "video/mp4,video/webm,video/x-ms-wmv,video/x-msvideo"
    ALLOWED_VIDEO_EXTENSIONS: str = ".mp4,.webm,.wmv,.avi"
    ALLOWED_FONT_TYPES: str = (
        "font/ttf,font/otf,application/vnd.ms-fontobject,image/svg+xml,"
        "font/woff,font/woff2,application/octet-stream"
    )
    ALLOWED_FONT_EXTENSIONS: str = ".ttf,.otf,.eot,.svg,.woff,.woff2"
    PRODUCT_INFO_EXTENSIONS: str = ".pdf,.ppt,.pptx,.txt,.md,.url"

    @property
    def cms_base_url(self) -> str | None:
        return self.CMS_URL.rstrip("/") if self.CMS_URL else None

    @property
    def workflow_base_url(self) -> str:
        if self.WORKFLOW_API_URL:
            return self.WORKFLOW_API_URL.rstrip("/")
        return self.EXT_API_URL.rstrip("/").removesuffix("/ext-api")

    @property
    def allowed_upload_extensions(self) -> list[str]:
        return _split(
            self.ALLOWED_IMAGE_EXTENSIONS,
            self.ALLOWED_VIDEO_EXTENSIONS,
            self.ALLOWED_FONT_EXTENSIONS,
        )

    @property
    def allowed_upload_types(self) -> list[str]:
        return _split(
            self.ALLOWED_IMAGE_TYPES, self.ALLOWED_VIDEO_TYPES, self.ALLOWED_FONT_TYPES
        )

    @property
    def product_info_extensions(self) -> list[str]:
        return _split(self.PRODUCT_INFO_EXTENSIONS)

    # Directory layout under PERSISTENT_DATA_DIR
    @property
    def uploads_dir(self) -> Path:
        return self.PERSISTENT_DATA_DIR / "uploads"

    @property
    def downloads_dir(self) -> Path:
        return self.PERSISTENT_DATA_DIR / "downloads"

    @property
    def generated_dir(self) -> Path:
        return self.PERSISTENT_DATA_DIR / "generated"

    @property
    def podcast_dir(self) -> Path:
        return self.generated_dir / "podcast"

    @property
    def reports_dir(self) -> Path:
        return self.PERSISTENT_DATA_DIR / "reports"

    @property
    def presentations_dir(self) -> Path:
        return self.PERSISTENT_DATA_DIR / "presentations"

    @property
    def products_info_dir(self) -> Path:
        return self.PERSISTENT_DATA_DIR / "products_info"

    @property
    def font_preview_dir(self) -> Path:
        return self.PERSISTENT_DATA_DIR / "previewFontImage"

    @property
    def image_history_path(self) -> Path:
        return self.generated_dir / "imageHistory.json"


def _split(*csv_values: str) -> list[str]:
    seen: dict[str, None] = {}
    for csv_value in csv_values:
        for item in csv_value.split(","):
            if item.strip():
                seen[item.strip().lower()] = None
    return list(seen)


@cache
def get_settings() -> Settings:
    return Settings()
