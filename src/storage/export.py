"""CSV export of summary totals, recent session history, and notes."""

from __future__ import annotations

import csv
from pathlib import Path

from pomodoro import Statistics

EXPORT_HISTORY_LIMIT = 50


def export_stats_csv(stats: Statistics, csv_path: str | Path) -> Path:
    path = Path(csv_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8", newline="") as fp:
        writer = csv.writer(fp, lineterminator="\n")
        writer.writerow(
            [
                "Date",
                "Total Sessions",
                "Sessions Today",
                "Work Time (hours)",
                "Break Time (hours)",
            ]
        )
        writer.writerow(
            [
                stats.last_session_date,
                stats.total_sessions,
                stats.sessions_today,
                f"{stats.total_work_time / 60.0:.2f}",
                f"{stats.total_break_time / 60.0:.2f}",
            ]
        )

        writer.writerow([])
        writer.writerow([])
        writer.writerow(["Session History"])
        writer.writerow(["Timestamp", "Phase", "Duration (min)", "Completed"])
        recent = list(reversed(stats.session_history))[:EXPORT_HISTORY_LIMIT]
        for record in recent:
            writer.writerow(
                [
                    record.timestamp,
                    record.phase_type,
                    record.duration,
                    "Yes" if record.completed else "No",
                ]
            )

        writer.writerow([])
        writer.writerow([])
        writer.writerow(["Notes"])
        writer.writerow(["Timestamp", "Phase", "Content"])
        for note in reversed(stats.notes):
            writer.writerow([note.timestamp, note.phase, note.content])

    return path
