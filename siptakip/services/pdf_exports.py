"""PDF export of the revenue report."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from io import BytesIO
from typing import Any

from siptakip.schemas.order import ReportResponse
from siptakip.utils.pdf_fonts import register_pdf_font

SOURCE_LABELS: dict[str, str] = {
    "restaurant": "Restoran",
    "yemeksepeti": "Yemeksepeti",
    "trendyol": "Trendyol Go",
    "getir": "Getir",
}


def _reportlab():
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    return {
        "colors": colors,
        "A4": A4,
        "ParagraphStyle": ParagraphStyle,
        "getSampleStyleSheet": getSampleStyleSheet,
        "Paragraph": Paragraph,
        "SimpleDocTemplate": SimpleDocTemplate,
        "Spacer": Spacer,
        "Table": Table,
        "TableStyle": TableStyle,
    }


def format_try(value: Decimal | int | float) -> str:
    return f"{Decimal(value):.2f} ₺"


def _grid_style(rl: dict[str, Any], font_name: str) -> Any:
    return rl["TableStyle"](
        [
            ("BACKGROUND", (0, 0), (-1, 0), rl["colors"].lightgrey),
            ("GRID", (0, 0), (-1, -1), 0.5, rl["colors"].black),
            ("FONTNAME", (0, 0), (-1, -1), font_name),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
        ]
    )


def render_report_pdf(report: ReportResponse, restaurant_name: str, utc_offset_hours: int = 3) -> bytes:
    """Render the aggregate and the paid order lines on A4."""
    font_name = register_pdf_font()
    rl = _reportlab()
    base = rl["getSampleStyleSheet"]()
    title = rl["ParagraphStyle"]("ReportTitle", parent=base["Title"], fontName=font_name)
    heading = rl["ParagraphStyle"]("ReportHeading", parent=base["Heading2"], fontName=font_name)
    normal = rl["ParagraphStyle"]("ReportNormal", parent=base["Normal"], fontName=font_name)
    offset = timedelta(hours=utc_offset_hours)
    local_from = report.from_date + offset
    local_to = report.to_date + offset

    story: list[Any] = [
        rl["Paragraph"](f"{restaurant_name} | Ciro Raporu", title),
        rl["Paragraph"](
            f"Dönem: {report.period} ({local_from:%d.%m.%Y %H:%M} - {local_to:%d.%m.%Y %H:%M})",
            normal,
        ),
        rl["Spacer"](1, 10),
    ]

    summary = rl["Table"](
        [
            ["", "Sipariş", "Ciro"],
            ["Toplam", str(report.total_orders), format_try(report.total_revenue)],
            ["Restoran", str(report.restaurant_orders), format_try(report.restaurant_revenue)],
            ["Paket servis", str(report.third_party_orders), format_try(report.third_party_revenue)],
            ["Ortalama sipariş", "", format_try(report.average_order)],
        ],
        colWidths=[160, 100, 140],
    )
    summary.setStyle(_grid_style(rl, font_name))
    story.extend([summary, rl["Spacer"](1, 14), rl["Paragraph"]("Siparişler", heading)])

    if not report.orders:
        story.append(rl["Paragraph"]("Bu dönemde ödenmiş sipariş yok.", normal))
    else:
        rows: list[list[str]] = [["Kod", "Kaynak", "Masa", "Ödeme", "Tutar"]]
        for order in report.orders:
            paid = f"{order.paid_at + offset:%d.%m %H:%M}" if order.paid_at else "-"
            rows.append(
                [
                    order.order_code,
                    SOURCE_LABELS.get(order.order_source.value, order.order_source.value),
                    str(order.table_number) if order.table_number is not None else "-",
                    paid,
                    format_try(order.total),
                ]
            )
        orders_table = rl["Table"](rows, colWidths=[110, 100, 50, 90, 90], repeatRows=1)
        orders_table.setStyle(_grid_style(rl, font_name))
        story.append(orders_table)

    buffer = BytesIO()
    rl["SimpleDocTemplate"](buffer, pagesize=rl["A4"], title=f"{restaurant_name} report").build(story)
    return buffer.getvalue()
