"""Traffic report — unique clients, most visited URLs, most active clients."""

import json
from dataclasses import asdict, dataclass, field

from loggio.client import LoggIO


@dataclass
class Report:
    total_records: int = 0
    unique_ips: int = 0
    most_visited_urls: list[str] = field(default_factory=list)
    most_active_ips: list[str] = field(default_factory=list)


def build_report(loggio: LoggIO, top: int = 3) -> Report:
    """Run the report queries against the records read so far."""
    most_visited = loggio.query().sort("referer").unique("referer").limit(top).export()
    most_active = loggio.query().sort("ip").unique("ip").limit(top).export()

    return Report(
        total_records=loggio.query().count(),
        unique_ips=loggio.query().unique("ip").count(),
        most_visited_urls=[r["referer"] for r in most_visited if "referer" in r],
        most_active_ips=[r["ip"] for r in most_active if "ip" in r],
    )


def format_report_text(report: Report) -> str:
    """Human-readable report."""
    lines = []
    lines.append(f"# Number of records:\n{report.total_records}\n")
    lines.append(f"# Number of unique IP addresses:\n{report.unique_ips}\n")

    lines.append(f"# Top {len(report.most_visited_urls)} most visited URLs:")
    lines.extend(report.most_visited_urls)
    lines.append("")

    lines.append(f"# Top {len(report.most_active_ips)} most active IP addresses:")
    lines.extend(report.most_active_ips)

    return "\n".join(lines)


def format_report_json(report: Report) -> str:
    """JSON report output."""
    return json.dumps(asdict(report), indent=2)
