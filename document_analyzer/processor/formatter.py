from collections.abc import Iterable

from document_analyzer.processor.models import DocumentAnalysis


def format_summary(analysis: DocumentAnalysis) -> str:
    """Render the analysis as the plain-text documentSummary field.

    Sections appear in a fixed order; empty collections are left out.
    """
    sections = [f"EXECUTIVE SUMMARY:\n{analysis.executive_summary}"]
    if analysis.key_points:
        sections.append("KEY POINTS:\n" + _numbered(analysis.key_points))
    if analysis.risks:
        sections.append(
            "RISKS IDENTIFIED:\n"
            + _numbered(
                f"[{risk.level.value.upper()}] {risk.description}"
                for risk in analysis.risks
            )
        )
    if analysis.next_actions:
        sections.append("NEXT ACTIONS:\n" + _numbered(analysis.next_actions))
    return "\n\n".join(sections)


def _numbered(items: Iterable[str]) -> str:
    return "\n".join(f"{index}. {item}" for index, item in enumerate(items, start=1))
