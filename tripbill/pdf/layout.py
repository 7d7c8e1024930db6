from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    h = hex_color.lstrip("#")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


class InvoiceLayout(BaseModel):
    """Named parameters for the exported page. All distances in millimetres."""

    model_config = ConfigDict(frozen=True)

    margin: float = 15

    # Header block, fixed offsets from the top edge
    brand_y: float = 20
    tagline_y: float = 26
    rule_y: float = 30
    title_y: float = 40
    customer_y: float = 50
    line_h: float = 6
    section_gap: float = 10
    detail_preview_lines: int = Field(default=2, ge=1)

    # Services table
    column_ratios: tuple[float, float, float] = (0.30, 0.50, 0.20)
    cell_padding: float = 2
    table_line_h: float = 5
    header_row_h: float = 8
    table_gap: float = 10

    # Payment summary box
    summary_width: float = 75
    summary_height: float = 46
    summary_padding: float = 5
    summary_radius: float = 3
    summary_line_h: float = 6

    # Footer, measured up from the bottom edge
    footer_offset: float = 20
    footer_height: float = 30

    accent: str = "#0EA5E9"
    text_color: str = "#323232"
    muted_text: str = "#646464"
    faint_text: str = "#969696"
    rule_color: str = "#DCDCDC"
    panel_fill: str = "#F0F9FF"
    row_alt: str = "#F8FAFC"

    @field_validator("column_ratios")
    @classmethod
    def _ratios_fill_width(cls, value: tuple[float, float, float]) -> tuple[float, float, float]:
        if any(r <= 0 for r in value) or abs(sum(value) - 1) > 1e-6:
            raise ValueError("column_ratios must be positive and sum to 1")
        return value

    def column_widths(self, table_w: float) -> tuple[float, float, float]:
        return tuple(table_w * ratio for ratio in self.column_ratios)  # type: ignore[return-value]

    def rgb(self, name: str) -> tuple[int, int, int]:
        return _hex_to_rgb(getattr(self, name))


DEFAULT_LAYOUT = InvoiceLayout()
