"""Render a project's speaking script as Markdown or plain text."""

from shared.enums import ExportFormat, Language
from shared.models import ProjectSnapshot, Slide
from shared.utils import format_minutes_seconds

EXPORT_LABELS: dict[Language, dict[str, str]] = {
    Language.JA: {
        "total": "総時間",
        "duration": "{minutes}分{seconds}秒",
        "slide_count": "スライド数",
        "slide": "スライド",
        "goal": "目標",
        "time": "時間",
        "seconds": "{seconds}秒",
        "locked": " (固定)",
        "talk_track": "台本",
        "key_points": "ポイント",
    },
    Language.EN: {
        "total": "Total time",
        "duration": "{minutes} min {seconds} sec",
        "slide_count": "Slides",
        "slide": "Slide",
        "goal": "Goal",
        "time": "Time",
        "seconds": "{seconds} sec",
        "locked": " (locked)",
        "talk_track": "Talk track",
        "key_points": "Key points",
    },
}


class ScriptExporter:
    """Builds the exported script document for a project snapshot."""

    def render(self, snapshot: ProjectSnapshot, export_format: ExportFormat = ExportFormat.MARKDOWN) -> str:
        export_format = ExportFormat(export_format)
        labels = EXPORT_LABELS[snapshot.project.settings.language]
        markdown = export_format == ExportFormat.MARKDOWN

        project = snapshot.project
        minutes, seconds = format_minutes_seconds(project.settings.total_seconds)
        lines = [
            f"# {project.title}" if markdown else project.title,
            "",
            f"{labels['total']}: {labels['duration'].format(minutes=minutes, seconds=seconds)}",
            f"{labels['slide_count']}: {project.stats.slide_count}",
            "",
            "---",
            "",
        ]
        for slide in snapshot.slides:
            lines.extend(self._render_slide(slide, labels, markdown))
        return "\n".join(lines)

    @staticmethod
    def _render_slide(slide: Slide, labels: dict[str, str], markdown: bool) -> list[str]:
        heading = f"{labels['slide']} {slide.index + 1}: {slide.title_guess}"
        time_text = labels["seconds"].format(seconds=slide.timing.seconds)
        if slide.timing.locked:
            time_text += labels["locked"]

        def label(name: str) -> str:
            return f"**{labels[name]}**" if markdown else labels[name]

        lines = [
            f"## {heading}" if markdown else heading,
            "",
            f"{label('goal')}: {slide.script.goal}",
            "",
            f"{label('time')}: {time_text}",
            "",
            f"### {labels['talk_track']}" if markdown else f"[{labels['talk_track']}]",
            "",
            slide.script.talk_track,
            "",
        ]
        if slide.script.key_points:
            lines.append(f"### {labels['key_points']}" if markdown else f"[{labels['key_points']}]")
            lines.append("")
            lines.extend(f"- {point}" for point in slide.script.key_points)
            lines.append("")
        lines.extend(["---", ""])
        return lines
