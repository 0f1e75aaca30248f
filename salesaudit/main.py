import argparse
import json
import mimetypes
import sys
from dataclasses import asdict
from pathlib import Path

from salesaudit.analysis.exceptions import AnalysisError
from salesaudit.config.settings import Settings
from salesaudit.ingestion.exceptions import IngestionError
from salesaudit.ingestion.models import UploadedFile
from salesaudit.ingestion.router import build_router
from salesaudit.logging.logger import Log
from salesaudit.processor.processor import build_processor


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="salesaudit",
        description="Audit a WhatsApp sales conversation export (.txt, .zip or screenshot).",
    )
    parser.add_argument("path", type=Path, help="conversation file to audit")
    parser.add_argument("--mime", default=None, help="declared MIME type (guessed if omitted)")
    parser.add_argument(
        "--ingest-only",
        action="store_true",
        help="print the composite transcript instead of running the analysis",
    )
    return parser.parse_args(argv)


def _load_upload(path: Path, mime: str | None) -> UploadedFile:
    declared = mime or mimetypes.guess_type(path.name)[0] or ""
    return UploadedFile(data=path.read_bytes(), mime_type=declared, name=path.name)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> read upload -> ingest (and analyze)."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        upload = _load_upload(args.path, args.mime)
        if args.ingest_only:
            print(build_router(settings).extract_text(upload))
            return 0
        report = build_processor(settings).process(upload)
    except OSError as exc:
        print(f"Could not read {args.path}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except (IngestionError, AnalysisError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(json.dumps(asdict(report.result), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
