"""Markdown rendering of a weather window: header lines plus a daily table."""

from weathernotes.models.weather import DayTemp, Summary, WeatherWindow, WindowMode

MODE_LABELS = {
    WindowMode.FORECAST: "Forecast",
    WindowMode.HISTORY: "Historic (proxy)",
}

TABLE_HEADER = "| Date | High (°C) | Low (°C) |"
TABLE_ALIGN = "|---|---:|---:|"


def deg(value: float) -> str:
    """Whole-degree display value."""
    return str(round(value))


def render_weather_fragment(
    window: WeatherWindow, summary: Summary, days: list[DayTemp]
) -> str:
    """Render the text that lives between the managed block markers."""
    lines = [
        f"**{MODE_LABELS[window.mode]} {window.display_start} → "
        f"{window.display_end}**  ",
        f"**Range**: {deg(summary.overall_high)}°C / "
        f"{deg(summary.overall_low)}°C  ",
    ]
    if window.is_shifted:
        lines.append(
            f"_Data for {window.query_start} → {window.query_end}_  "
        )
    lines.append("")
    lines.append(format_ranges(summary))
    lines.append("")
    lines.extend(render_table(days))
    return "\n".join(lines) + "\n"


def format_ranges(summary: Summary) -> str:
    unit = "day" if summary.day_count == 1 else "days"
    return (
        f"_{summary.day_count} {unit} • "
        f"High range {deg(summary.high_range[0])}° → {deg(summary.high_range[1])}° • "
        f"Low range {deg(summary.low_range[0])}° → {deg(summary.low_range[1])}°_"
    )


def render_table(days: list[DayTemp]) -> list[str]:
    rows = [TABLE_HEADER, TABLE_ALIGN]
    for d in sorted(days, key=lambda d: d.date):
        rows.append(f"| {d.date} | {deg(d.high)} | {deg(d.low)} |")
    return rows
