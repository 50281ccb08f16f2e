from typing import Any

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field


class Font(OutputBaseModel):
    """A font in the CMS font library."""

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    fileName: str | None = None
    familyName: str | None = None
    createdAt: str | None = None
    modifiedAt: str | None = None
    modifiedBy: str | None = None
    size: int | None = None
    md5: str | None = None


class FontDetails(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    details: dict[str, Any] | None = None
    fontId: int | None = None


class LibraryUploadFile(OutputBaseModel):
    """One entry of the CMS upload handler's ``files`` list."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    fileName: str | None = None
    mediaId: int | None = None
    mediaType: str | None = None
    size: int | None = None
    md5: str | None = None
    error: str | None = None


class LibraryUploadResponse(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    files: list[LibraryUploadFile]


class GoogleFontFamily(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    family: str
    category: str | None = None
    variants: list[str] = []
    subsets: list[str] = []
    version: str | None = None
    lastModified: str | None = None
    files: dict[str, str] = {}


class GoogleFontList(OutputBaseModel):
    model_config = ConfigDict(extra="allow")

    items: list[GoogleFontFamily] = []


class GetFontsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int | None = Field(None, description="Filter by font ID.")
    name: str | None = Field(None, description="Filter by font name.")


class FontIdRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="ID of the font.")


class UploadFontRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    fileName: str = Field(..., description="File name including extension, e.g. 'Roboto-Regular.ttf'.")
    contentBase64: str = Field(..., description="Font file content, base64 encoded.")
    name: str | None = Field(None, description="Display name in the CMS library.")
    oldMediaId: int | None = Field(None, description="Media ID of a font this upload replaces.")


class DownloadFontRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="ID of the font to download.")


class GetGoogleFontsRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    family: str | None = Field(None, description="Exact family name, e.g. 'Roboto'.")
    sort: str | None = Field(
        None, description="'alpha', 'date', 'popularity', 'style' or 'trending'."
    )
    category: str | None = Field(
        None, description="Only return this category, e.g. 'serif', 'sans-serif', 'handwriting'."
    )
    subset: str | None = Field(
        None, description="Only return families supporting this subset, e.g. 'latin', 'japanese'."
    )
    limit: int = Field(20, ge=1, le=200, description="Maximum families to return.")


class UploadGoogleFontRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    family: str = Field(..., description="Google Fonts family name, e.g. 'Roboto'.")
    variant: str = Field(
        "regular", description="Variant key, e.g. 'regular', 'italic', '700', '700italic'."
    )
    name: str | None = Field(None, description="Display name in the CMS library.")


class GenerateFontPreviewRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="ID of a CMS font to preview.")
    text: str = Field(
        "The quick brown fox jumps over the lazy dog 0123456789",
        description="Sample text to render.",
    )
    fontSize: int = Field(48, ge=8, le=256, description="Font size in pixels.")


class FontUploadForm(FlatBaseModel):
    """Form fields sent next to the font file on ``POST /api/fonts``."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    oldMediaId: int | None = None
