"""
Output formatting for els-finder.

Generates JSON and text reports from scan results.
"""

import json
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Tuple

from elsfinder.core import ExitCode, MatchRecord, ScanResult


# ANSI color codes
class Colors:
    """ANSI escape codes for terminal colors."""
    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    RESET = "\033[0m"
    BOLD = "\033[1m"

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        # Disable if NO_COLOR env var is set or not a TTY
        if os.environ.get("NO_COLOR"):
            return False
        if not sys.stdout.isatty():
            return False
        # Enable ANSI on Windows 10+
        if sys.platform == "win32":
            os.system("")
        return True


def format_json(results: List[Tuple[Path, ScanResult]]) -> str:
    """
    Format scan results as JSON.

    Args:
        results: List of (file_path, result) tuples.

    Returns:
        JSON string representation.
    """
    output = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "summary": {
            "total": len(results),
            "found": sum(1 for _, r in results if r.found),
            "not_found": sum(1 for _, r in results if r.not_found),
            "errors": sum(1 for _, r in results if r.errored),
            "matches": sum(len(r.records) for _, r in results),
        },
        "files": [],
    }

    for file_path, result in results:
        file_report = {
            "path": str(file_path),
            "status": _exit_code_to_status(result.exit_code),
            "exit_code": result.exit_code.value,
            "text_length": result.text_length,
            "pages": result.pages,
            "ocr_performed": result.ocr_performed,
        }

        if result.error:
            file_report["error"] = result.error

        if result.records:
            file_report["matches"] = [r.to_dict() for r in result.records]

        output["files"].append(file_report)

    return json.dumps(output, indent=2, ensure_ascii=False)


def format_record(record: MatchRecord, index: int) -> str:
    """Render one match as a human-readable block."""
    return "\n".join([
        f"--- Finding {index} ---",
        "=== HIDDEN CODE FOUND ===",
        f'Message: "{record.phrase}"',
        f"Letter spacing: {record.stride} "
        f"({abs(record.linear_distance)} characters in the text)",
        f"Start position: character {record.start_offset} of the text",
        f"Direction: {record.direction}",
        "",
        f"HIDDEN PARAGRAPH AT DISTANCE {record.stride}:",
        record.highlighted_paragraph,
        "",
        f"WORD FOUND IN PARAGRAPH: [{record.letters}]",
        "",
        "TEXT CONTEXT:",
        record.context,
    ])


def format_text(results: List[Tuple[Path, ScanResult]]) -> str:
    """
    Format scan results as human-readable text with colors.

    Args:
        results: List of (file_path, result) tuples.

    Returns:
        Text string representation.
    """
    lines: List[str] = []
    use_color = Colors.enabled()

    for file_path, result in results:
        status = _exit_code_to_status(result.exit_code).upper()

        if use_color:
            if result.found:
                status_str = f"{Colors.GREEN}{Colors.BOLD}[FOUND]{Colors.RESET}"
            elif result.not_found:
                status_str = f"{Colors.YELLOW}{Colors.BOLD}[NOT FOUND]{Colors.RESET}"
            else:
                status_str = f"{Colors.RED}{Colors.BOLD}[ERROR]{Colors.RESET}"
        else:
            status_str = f"[{status}]"

        lines.append(f"{status_str} {file_path.name}")

        if result.error:
            lines.append(f"  Error: {result.error}")
            continue

        if not result.records:
            lines.append("  No hidden codes found with the given parameters.")
            continue

        for i, record in enumerate(result.records, 1):
            lines.append("")
            lines.append(format_record(record, i))
        lines.append("")
        lines.append(f"Total findings: {len(result.records)}")

    # Summary
    if len(results) > 1:
        found = sum(1 for _, r in results if r.found)
        not_found = sum(1 for _, r in results if r.not_found)
        errors = sum(1 for _, r in results if r.errored)
        lines.append("")

        if use_color:
            summary = (
                f"{Colors.GREEN}{found} with findings{Colors.RESET}, "
                f"{Colors.YELLOW}{not_found} without{Colors.RESET}, "
                f"{Colors.RED}{errors} errors{Colors.RESET}"
            )
        else:
            summary = f"{found} with findings, {not_found} without, {errors} errors"

        lines.append(summary)

    return "\n".join(lines)


def _exit_code_to_status(code: ExitCode) -> str:
    """Convert exit code to status string."""
    return {
        ExitCode.FOUND: "found",
        ExitCode.NOT_FOUND: "not found",
        ExitCode.ERROR: "error",
    }.get(code, "unknown")
