from __future__ import annotations

import logging
from pathlib import Path

from fpdf import FPDF

from tripbill.models import format_inr
from tripbill.models.invoice import (
    AccommodationSection,
    CustomerSection,
    DocumentHeader,
    InvoiceDocument,
    ServiceRow,
    SummaryLine,
)
from tripbill.pdf.layout import DEFAULT_LAYOUT, InvoiceLayout
from tripbill.settings import settings

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).parent / "fonts"

BUNDLED_FONT = "DejaVuSans"
BUNDLED_FONT_FILES = {"": "DejaVuSans.ttf", "B": "DejaVuSans-Bold.ttf"}
CUSTOM_FONT = "InvoiceSans"

# Width reserved for the right-hand column of the info blocks.
RIGHT_COLUMN_W = 85


class InvoicePDF:
    """Renders an ``InvoiceDocument`` onto A4 pages.

    Layout is a vertical flow: header and info blocks at fixed offsets, the
    services table from wherever the info blocks end, the summary box
    anchored below the table at the right margin, and a footer pinned to the
    bottom of every page.
    """

    def generate(
        self,
        document: InvoiceDocument,
        layout: InvoiceLayout | None = None,
        font_path: str | None = None,
        fallback_font_paths: list[str] | None = None,
    ) -> bytes:
        self._layout = layout or DEFAULT_LAYOUT
        self._footer = document.footer
        font_path = settings.pdf_font_path if font_path is None else font_path
        if fallback_font_paths is None:
            fallback_font_paths = settings.pdf_fallback_font_paths

        pdf = FPDF(orientation="P", unit="mm", format="A4")
        pdf.set_margins(self._layout.margin, self._layout.margin, self._layout.margin)
        pdf.set_auto_page_break(auto=False)
        pdf.set_title(document.metadata_title)
        pdf.set_subject(document.header.title)
        pdf.set_author(document.author)
        pdf.set_creator(document.creator)

        self._font = self._register_fonts(pdf, font_path, fallback_font_paths)

        pdf.add_page()
        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        self._draw_header(pdf, document.header)
        y = self._draw_customer(pdf, document.customer)
        y = self._draw_accommodation(pdf, document.accommodation, y + self._layout.section_gap)
        y = self._draw_table(pdf, page_w, document.services.columns, document.services.rows, y + self._layout.section_gap)
        self._draw_summary(pdf, document.services.summary, y + self._layout.table_gap)
        self._draw_footer(pdf)

        output = bytes(pdf.output())
        logger.debug(
            "PDF generated: customer=%s rows=%d pages=%d font=%s size=%d bytes",
            document.customer.customer_id,
            len(document.services.rows),
            pdf.page_no(),
            self._font,
            len(output),
        )
        return output

    def _register_fonts(self, pdf: FPDF, font_path: str, fallback_font_paths: list[str]) -> str:
        """Register the body font and any fallbacks; return the family to draw with."""
        if font_path:
            pdf.add_font(CUSTOM_FONT, "", font_path)
            pdf.add_font(CUSTOM_FONT, "B", font_path)
            family = CUSTOM_FONT
        else:
            for style, filename in BUNDLED_FONT_FILES.items():
                pdf.add_font(BUNDLED_FONT, style, str(FONTS_DIR / filename))
            family = BUNDLED_FONT

        # Scripts the body font lacks (Devanagari, for one) are drawn from these.
        fallbacks = []
        for i, path in enumerate(fallback_font_paths):
            name = f"InvoiceFallback{i}"
            pdf.add_font(name, "", path)
            pdf.add_font(name, "B", path)
            fallbacks.append(name)
        if fallbacks:
            pdf.set_fallback_fonts(fallbacks)
        return family

    def _money(self, amount: int) -> str:
        return format_inr(amount)

    def _content_bottom(self, pdf: FPDF) -> float:
        return pdf.h - self._layout.footer_height

    def _new_page(self, pdf: FPDF) -> float:
        self._draw_footer(pdf)
        pdf.add_page()
        return pdf.t_margin

    def _text(self, pdf: FPDF, x: float, y: float, text: str) -> None:
        """Write text with its baseline at y.

        ``FPDF.text`` ignores fallback fonts, so this goes through ``cell``
        (baseline sits at top + 0.8 * font size for a cell one font size tall).
        """
        h = pdf.font_size
        pdf.set_xy(x - pdf.c_margin, y - 0.8 * h)
        pdf.cell(pdf.get_string_width(text) + 2 * pdf.c_margin, h, text)

    def _text_right(self, pdf: FPDF, right: float, y: float, text: str) -> None:
        self._text(pdf, right - pdf.get_string_width(text), y, text)

    def _text_center(self, pdf: FPDF, y: float, text: str) -> None:
        self._text(pdf, (pdf.w - pdf.get_string_width(text)) / 2, y, text)

    def _draw_header(self, pdf: FPDF, header: DocumentHeader) -> None:
        lo = self._layout

        pdf.set_font(self._font, "B", 24)
        pdf.set_text_color(*lo.rgb("accent"))
        self._text_center(pdf, lo.brand_y, header.brand.upper())

        pdf.set_font(self._font, "", 10)
        pdf.set_text_color(*lo.rgb("muted_text"))
        self._text_center(pdf, lo.tagline_y, header.tagline)

        pdf.set_draw_color(*lo.rgb("rule_color"))
        pdf.set_line_width(0.2)
        pdf.line(pdf.l_margin, lo.rule_y, pdf.w - pdf.r_margin, lo.rule_y)

        pdf.set_font(self._font, "B", 16)
        pdf.set_text_color(*lo.rgb("text_color"))
        self._text_center(pdf, lo.title_y, header.title.upper())

    def _draw_customer(self, pdf: FPDF, customer: CustomerSection) -> float:
        """Draw the two-column customer block and return the y below it."""
        lo = self._layout
        left_x = pdf.l_margin
        right_x = pdf.w - RIGHT_COLUMN_W

        pdf.set_text_color(*lo.rgb("text_color"))
        pdf.set_font(self._font, "B", 10)
        self._text(pdf, left_x, lo.customer_y, "CUSTOMER DETAILS")
        self._text(pdf, right_x, lo.customer_y, "INVOICE INFORMATION")

        pdf.set_font(self._font, "", 9)
        left = [f"Name: {customer.customer_name}"] + [f"{line.label}: {line.value}" for line in customer.customer_lines]
        right = [f"Customer ID: {customer.customer_id}"] + [
            f"{line.label}: {line.value}" for line in customer.invoice_lines
        ]

        y = lo.customer_y + 8
        for i, text in enumerate(left):
            self._text(pdf, left_x, y + i * lo.line_h, text)
        for i, text in enumerate(right):
            self._text(pdf, right_x, y + i * lo.line_h, text)

        return y + (max(len(left), len(right)) - 1) * lo.line_h

    def _preview_lines(self, pdf: FPDF, text: str, width: float) -> list[str]:
        """Wrap a detail preview to width, keeping at most ``detail_preview_lines``."""
        if not text:
            return []
        limit = self._layout.detail_preview_lines
        lines = pdf.multi_cell(width, self._layout.line_h, text, dry_run=True, output="LINES")
        if len(lines) <= limit:
            return lines
        lines = lines[:limit]
        last = lines[-1].rstrip()
        while last and pdf.get_string_width(last + "...") > width - 2 * pdf.c_margin:
            last = last[:-1]
        lines[-1] = last + "..."
        return lines

    def _draw_accommodation(self, pdf: FPDF, accommodation: AccommodationSection, y: float) -> float:
        lo = self._layout
        left_x = pdf.l_margin
        right_x = pdf.w - RIGHT_COLUMN_W
        right_w = RIGHT_COLUMN_W - pdf.r_margin

        pdf.set_text_color(*lo.rgb("text_color"))
        pdf.set_font(self._font, "B", 10)
        self._text(pdf, left_x, y, "ACCOMMODATION DETAILS")
        self._text(pdf, right_x, y, "DETAILS")

        pdf.set_font(self._font, "", 9)
        y += 8
        left = [
            f"Trip / Hotel: {accommodation.trip_name}",
            f"Room: {accommodation.room_number}",
            f"Travel Security: {accommodation.travel_security}",
        ]
        for i, text in enumerate(left):
            self._text(pdf, left_x, y + i * lo.line_h, text)
        left_end = y + (len(left) - 1) * lo.line_h

        # An empty slot still takes a line.
        baseline = y
        for detail in accommodation.detail_previews:
            for line in self._preview_lines(pdf, detail, right_w) or [""]:
                if line:
                    self._text(pdf, right_x, baseline, line)
                baseline += lo.line_h
        right_end = baseline - lo.line_h

        return max(left_end, right_end)

    def _draw_table_header(self, pdf: FPDF, widths: tuple[float, ...], columns: tuple[str, ...], y: float) -> float:
        lo = self._layout
        pdf.set_fill_color(*lo.rgb("accent"))
        pdf.set_draw_color(*lo.rgb("accent"))
        pdf.set_text_color(255, 255, 255)
        pdf.set_font(self._font, "B", 9)

        x = pdf.l_margin
        for i, (w, label) in enumerate(zip(widths, columns)):
            pdf.set_xy(x, y)
            pdf.cell(w, lo.header_row_h, f" {label} ", border=1, fill=True, align="R" if i == 2 else "L")
            x += w
        return y + lo.header_row_h

    def _draw_row(
        self,
        pdf: FPDF,
        widths: tuple[float, ...],
        chunk: list[list[str]],
        line_count: int,
        index: int,
        y: float,
    ) -> float:
        """Draw one row (or one page's share of a split row) and return the y below it."""
        lo = self._layout
        pad = lo.cell_padding
        row_h = line_count * lo.table_line_h + 2 * pad

        pdf.set_draw_color(*lo.rgb("rule_color"))
        pdf.set_line_width(0.2)
        if index % 2:
            pdf.set_fill_color(*lo.rgb("row_alt"))
        else:
            pdf.set_fill_color(255, 255, 255)
        pdf.set_text_color(*lo.rgb("text_color"))
        pdf.set_font(self._font, "", 9)

        x = pdf.l_margin
        for w, lines, align in zip(widths, chunk, ("L", "L", "R")):
            pdf.rect(x, y, w, row_h, style="DF")
            pdf.set_xy(x + pad, y + pad)
            pdf.multi_cell(w - 2 * pad, lo.table_line_h, "\n".join(lines), align=align)
            x += w
        return y + row_h

    def _draw_table(
        self,
        pdf: FPDF,
        page_w: float,
        columns: tuple[str, ...],
        rows: tuple[ServiceRow, ...],
        y: float,
    ) -> float:
        """Draw the services table starting at y; return the y where it ends.

        A row that does not fit moves to the next page, under a repeated
        header. A row taller than a whole page is split across pages.
        """
        lo = self._layout
        widths = lo.column_widths(page_w)
        pad = lo.cell_padding
        bottom = self._content_bottom(pdf)

        page_lines = int((bottom - pdf.t_margin - lo.header_row_h - 2 * pad) // lo.table_line_h)
        if page_lines < 1:
            raise ValueError("Layout leaves no room for the services table")

        # Label, header and the first line of a row stay together.
        if y + 3 + lo.header_row_h + lo.table_line_h + 2 * pad > bottom:
            y = self._new_page(pdf) + lo.line_h

        pdf.set_text_color(*lo.rgb("text_color"))
        pdf.set_font(self._font, "B", 10)
        self._text(pdf, pdf.l_margin, y, "SERVICES")
        y = self._draw_table_header(pdf, widths, columns, y + 3)

        for index, row in enumerate(rows):
            cells = (row.name, row.details, self._money(row.amount))
            pdf.set_font(self._font, "", 9)
            wrapped = [
                pdf.multi_cell(w - 2 * pad, lo.table_line_h, text, dry_run=True, output="LINES") or [""]
                for w, text in zip(widths, cells)
            ]
            total = max(len(lines) for lines in wrapped)

            start = 0
            while start < total:
                room = int((bottom - y - 2 * pad) // lo.table_line_h)
                remaining = total - start
                # Only rows that cannot fit on any page are split.
                if room < 1 or (start == 0 and room < remaining <= page_lines):
                    y = self._new_page(pdf)
                    y = self._draw_table_header(pdf, widths, columns, y)
                    continue
                take = min(remaining, room)
                chunk = [lines[start : start + take] for lines in wrapped]
                y = self._draw_row(pdf, widths, chunk, take, index, y)
                start += take

        return y

    def _draw_summary(self, pdf: FPDF, summary: tuple[SummaryLine, ...], y: float) -> None:
        lo = self._layout
        w, h, pad = lo.summary_width, lo.summary_height, lo.summary_padding
        if y + h > self._content_bottom(pdf):
            y = self._new_page(pdf)

        x = pdf.w - pdf.r_margin - w
        right = x + w - pad

        pdf.set_fill_color(*lo.rgb("panel_fill"))
        pdf.set_draw_color(*lo.rgb("accent"))
        pdf.set_line_width(0.3)
        pdf.rect(x, y, w, h, style="DF", round_corners=True, corner_radius=lo.summary_radius)

        baseline = y + pad + 4
        pdf.set_text_color(*lo.rgb("text_color"))
        pdf.set_font(self._font, "B", 10)
        self._text(pdf, x + pad, baseline, "PAYMENT SUMMARY")
        baseline += lo.summary_line_h + 2

        for line in summary:
            if line.emphasized:
                pdf.set_draw_color(*lo.rgb("accent"))
                pdf.set_line_width(0.5)
                pdf.line(x + pad, baseline - 2, right, baseline - 2)
                baseline += 4
                pdf.set_font(self._font, "B", 10)
                pdf.set_text_color(*lo.rgb("accent"))
                label = f"{line.label.upper()}:"
            else:
                pdf.set_font(self._font, "", 9)
                pdf.set_text_color(*lo.rgb("text_color"))
                label = f"{line.label}:"
            self._text(pdf, x + pad, baseline, label)
            self._text_right(pdf, right, baseline, self._money(line.amount))
            baseline += lo.summary_line_h

    def _draw_footer(self, pdf: FPDF) -> None:
        lo = self._layout
        y = pdf.h - lo.footer_offset
        pdf.set_font(self._font, "", 8)
        pdf.set_text_color(*lo.rgb("faint_text"))
        for i, text in enumerate(self._footer):
            self._text_center(pdf, y + i * 5, text)
