"""PDF export of a diet plan."""

import io
import logging
from dataclasses import dataclass
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from diet_planner.domain.errors import ExportError
from diet_planner.domain.plan import DietPlan
from diet_planner.domain.profile import UserProfile
from diet_planner.services.dashboard import (
    basal_metabolic_rate,
    day_calories,
    macro_breakdown,
)

_logger = logging.getLogger(__name__)

_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#ecfdf5")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#064e3b")),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#d1fae5")),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
    ]
)


def export_filename(profile: UserProfile) -> str:
    """Return the download name for a profile's plan."""
    return f"NutriAI_Diyet_Plani_{profile.age}yas.pdf"


@dataclass
class PlanExportService:
    """Renders the displayed plan into an A4 PDF."""

    title: str = "NutriAI Diyet Planı"

    def render(
        self,
        profile: UserProfile,
        plan: DietPlan,
        favorite_ids: frozenset[str] = frozenset(),
    ) -> bytes:
        """Return PDF bytes for the plan."""
        try:
            buffer = io.BytesIO()
            document = SimpleDocTemplate(
                buffer,
                pagesize=A4,
                leftMargin=10 * mm,
                rightMargin=10 * mm,
                topMargin=10 * mm,
                bottomMargin=10 * mm,
                title=self.title,
            )
            document.build(self._story(profile, plan, favorite_ids))
        except Exception as exc:
            _logger.exception("PDF export failed")
            raise ExportError(f"Could not export plan: {exc}") from exc
        return buffer.getvalue()

    def _story(
        self, profile: UserProfile, plan: DietPlan, favorite_ids: frozenset[str]
    ) -> list:
        styles = getSampleStyleSheet()
        body = styles["BodyText"]
        story: list = [
            Paragraph(self.title, styles["Title"]),
            _text(plan.summary, body),
            Spacer(1, 4 * mm),
            Paragraph(
                f"Günlük kalori: {plan.daily_calories:.0f} kcal &nbsp;&nbsp; "
                f"Bazal metabolizma: ~{basal_metabolic_rate(profile)} kcal",
                body,
            ),
        ]
        macro_rows = [["Makro", "Gram", "Kalori %"]]
        grams = {
            "Protein": plan.macros.protein,
            "Karbonhidrat": plan.macros.carbs,
            "Yağ": plan.macros.fat,
        }
        for macro in macro_breakdown(plan.macros):
            macro_rows.append(
                [macro.name, f"{grams[macro.name]:.0f} g", f"{macro.percent:.0f}%"]
            )
        macro_table = Table(macro_rows, hAlign="LEFT")
        macro_table.setStyle(_TABLE_STYLE)
        story.extend([Spacer(1, 3 * mm), macro_table])

        for day in plan.weekly_plan:
            story.append(Spacer(1, 5 * mm))
            heading = f"{day.day} ({day_calories(day):.0f} kcal)"
            story.append(_text(heading, styles["Heading2"]))
            rows = [["Öğün", "Yemek", "kcal", "P / K / Y", "Malzemeler"]]
            for meal in day.meals:
                dish = f"{meal.dish} (*)" if meal.id in favorite_ids else meal.dish
                rows.append(
                    [
                        _text(meal.time, body),
                        _text(dish, body),
                        f"{meal.calories:.0f}",
                        f"{meal.protein:.0f} / {meal.carbs:.0f} / {meal.fat:.0f}",
                        _text(", ".join(meal.ingredients or ()), body),
                    ]
                )
            table = Table(
                rows,
                colWidths=[25 * mm, 55 * mm, 15 * mm, 28 * mm, 67 * mm],
                repeatRows=1,
            )
            table.setStyle(_TABLE_STYLE)
            story.append(table)

        if plan.tips:
            story.append(Spacer(1, 5 * mm))
            story.append(Paragraph("İpuçları", styles["Heading2"]))
            story.extend(_text(f"- {tip}", body) for tip in plan.tips)
        return story


def _text(value: str, style: ParagraphStyle) -> Paragraph:
    return Paragraph(escape(value), style)
