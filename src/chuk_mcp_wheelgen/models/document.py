"""
Document model - a whole-artwork description.

A DocumentAST contains:
- Rings (radius, element slot count, pattern)
- An optional center dot
- Guides (reserved placeholder)
- Variables (named, reusable patterns)
- A palette (uppercase letter -> color expression)
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_wheelgen.models.pattern import PatternNode


class ColorFunction(BaseModel):
    """A generated color scheme such as ``triadic(baseHue: 180)``."""

    type: Literal["color_function"] = "color_function"
    name: str = Field(..., description="Function name, lowercased")
    params: dict[str, float] = Field(default_factory=dict, description="Named numeric params")

    model_config = {"frozen": True}


class ColorRgb(BaseModel):
    """Literal RGB color."""

    type: Literal["color_rgb"] = "color_rgb"
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)

    model_config = {"frozen": True}


class ColorHsb(BaseModel):
    """Literal HSB color (hue in degrees, saturation/brightness in percent)."""

    type: Literal["color_hsb"] = "color_hsb"
    h: int = Field(..., ge=0, le=360)
    s: int = Field(..., ge=0, le=100)
    b: int = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


class ColorReference(BaseModel):
    """Alias to another palette entry."""

    type: Literal["color_reference"] = "color_reference"
    name: str = Field(..., pattern=r"^[A-Z]$", description="Palette letter")

    model_config = {"frozen": True}


ColorNode = Annotated[
    ColorFunction | ColorRgb | ColorHsb | ColorReference,
    Field(discriminator="type"),
]


class RingDefinition(BaseModel):
    """
    One artwork layer.

    The pattern is fitted to ``element_count`` slots around the ring.
    """

    radius: float = Field(..., gt=0, description="Ring radius")
    element_count: int = Field(..., gt=0, description="Number of element slots")
    pattern: PatternNode = Field(..., description="Pattern AST")
    colors: list[str] | None = Field(None, description="Palette letters for this ring")

    model_config = {"frozen": True}

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, v: list[str] | None) -> list[str] | None:
        """Palette references are single uppercase letters."""
        if v is None:
            return v
        for name in v:
            if len(name) != 1 or not ("A" <= name <= "Z"):
                raise ValueError(f"Invalid palette reference: {name}")
        return v


class DotDefinition(BaseModel):
    """Center dot properties. Every field is optional."""

    size: float | None = Field(None, description="Dot size")
    color: str | None = Field(None, description="Raw color value")
    visible: bool | None = Field(None, description="Whether the dot is drawn")


class GuidesDefinition(BaseModel):
    """Reserved for grid controls; carries no fields yet."""

    model_config = {"frozen": True}


class VariableDefinition(BaseModel):
    """A named pattern from the variables section."""

    name: str = Field(..., description="Variable name without the @")
    pattern: PatternNode = Field(..., description="Pattern AST")

    model_config = {"frozen": True}


class DocumentAST(BaseModel):
    """A parsed artwork document."""

    rings: list[RingDefinition] = Field(default_factory=list, description="Rings in order")
    dot: DotDefinition | None = Field(None, description="Center dot")
    guides: GuidesDefinition | None = Field(None, description="Guides placeholder")
    variables: list[VariableDefinition] = Field(
        default_factory=list, description="Variables in document order"
    )
    palette: dict[str, ColorNode] | None = Field(None, description="Palette entries")

    def get_variable(self, name: str) -> PatternNode | None:
        """Latest definition of a variable, or None."""
        for variable in reversed(self.variables):
            if variable.name == name:
                return variable.pattern
        return None

    def to_yaml_dict(self) -> dict:
        """Plain-data form suitable for yaml.safe_dump."""
        return self.model_dump(mode="json", exclude_none=True)
