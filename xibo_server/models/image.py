from typing import Literal

from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field

AspectRatio = Literal["1:1", "3:4", "4:3", "9:16", "16:9"]

ASPECT_RATIO_SIZES: dict[str, tuple[int, int]] = {
    "1:1": (1024, 1024),
    "3:4": (896, 1280),
    "4:3": (1280, 896),
    "9:16": (768, 1408),
    "16:9": (1408, 768),
}


class ImageRecord(OutputBaseModel):
    """One generated image in a generator's history."""

    model_config = ConfigDict(extra="forbid")

    id: int
    filename: str
    prompt: str
    aspectRatio: str
    width: int
    height: int
    createdAt: str


class GeneratorHistory(OutputBaseModel):
    model_config = ConfigDict(extra="forbid")

    images: list[ImageRecord] = []


class GenerateImageRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(..., min_length=1, description="What the image should show.")
    generatorId: str = Field(
        ..., description="Caller-chosen ID grouping images of one generation session."
    )
    aspectRatio: AspectRatio = Field("16:9", description="Aspect ratio of the image.")
    newGeneration: bool = Field(
        False, description="True to discard this generator's previous images first."
    )


class GetImageHistoryRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    generatorId: str | None = Field(
        None, description="Generator to inspect. Omit to get every generator's history."
    )


class EndImageGenerationRequest(FlatBaseModel):
    model_config = ConfigDict(extra="forbid")

    generatorId: str = Field(..., description="Generator whose session is ending.")
    isSuccess: bool = Field(
        ..., description="True keeps this generator's images and removes every other generator's."
    )
