# ============================================================================
# email_chronology/cli.py - CLI
# ============================================================================

import argparse
import json
import logging
from pathlib import Path

from . import create_chronology_app
from .config import config
from .formatters import render_timeline


def main() -> int:
    """Command line interface for building an email timeline."""
    parser = argparse.ArgumentParser(
        description="Build a chronological, deduplicated email timeline from .msg files"
    )
    parser.add_argument("files", type=Path, nargs="+", help="Input message files (.msg)")
    parser.add_argument("--log-level", type=str, default=config.DEFAULT_LOG_LEVEL,
                        choices=config.VALID_LOG_LEVELS,
                        help="Set logging level")
    parser.add_argument("--format", dest="output_format", default="text",
                        choices=["text", "json"],
                        help="Output format")
    parser.add_argument("--output", type=Path, help="Write the timeline to this file")
    args = parser.parse_args()

    # Set log level
    log_level = getattr(logging, args.log_level.upper())
    app = create_chronology_app(log_level=log_level)

    reports = app.handle_files(args.files)

    if args.output_format == "json":
        rendered = json.dumps(app.export(), indent=2, default=str)
    else:
        rendered = render_timeline(app.timeline.group_by_source())

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(rendered)
        print(f"Results saved to: {args.output}")
    else:
        print(rendered)

    for notice in app.notifications.notifications:
        print(f"[{notice.level}] {notice.title}: {notice.message}")

    return 0 if any(report.success for report in reports) else 1


if __name__ == "__main__":  # pragma: no cover
    import sys
    sys.exit(main())
