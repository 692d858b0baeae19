"""Template styling options used for page-height estimation."""

from typing import Literal

from pydantic import BaseModel


class TemplateColors(BaseModel):
    primary: str = "#2563eb"
    secondary: str = "#64748b"
    text: str = "#333333"
    heading: str = "#111111"
    muted: str = "#666666"
    border: str = "#999999"
    background: str = "#ffffff"


class FontFamily(BaseModel):
    heading: str = "Helvetica-Bold"
    body: str = "Helvetica"


class FontSize(BaseModel):
    name: float = 18
    section_heading: float = 12
    job_title: float = 11
    company: float = 10
    body: float = 10.5
    small: float = 9


class TemplateTypography(BaseModel):
    font_family: FontFamily = FontFamily()
    font_size: FontSize = FontSize()
    line_height: float = 1.4


class PageMargins(BaseModel):
    top: float = 36  # 0.5 inch
    bottom: float = 48
    left: float = 54  # 0.75 inch
    right: float = 54


class TemplateSpacing(BaseModel):
    page: PageMargins = PageMargins()
    section_gap: float = 14
    entry_gap: float = 10
    bullet_indent: float = 12


class TemplateFeatures(BaseModel):
    section_dividers: bool = True
    bullet_style: Literal["disc", "dash", "arrow", "none"] = "disc"
    date_alignment: Literal["left", "right", "inline"] = "right"
    name_center: bool = True
    contact_center: bool = True
    section_uppercase: bool = True


class TemplateStyle(BaseModel):
    colors: TemplateColors = TemplateColors()
    typography: TemplateTypography = TemplateTypography()
    spacing: TemplateSpacing = TemplateSpacing()
    features: TemplateFeatures = TemplateFeatures()

    # Flattened values the one-page fitter adjusts
    body_font_size: float = 10.5
    heading_font_size: float = 12
    section_gap: float = 14
