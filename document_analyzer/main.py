import argparse
import sys
from pathlib import Path

from document_analyzer.config.settings import Settings
from document_analyzer.controller.controller import DocumentAnalyzerController
from document_analyzer.controller.states import Error, PipelineState, Ready
from document_analyzer.database.connection import close_pool, init_pool
from document_analyzer.database.repositories.attachment_repository import AttachmentRepository
from document_analyzer.logging.logger import Log
from document_analyzer.processor.models import DocumentFile, OwnerReference
from document_analyzer.processor.processor import Processor, build_processor

_PATH_CHARS = ("/", "\\", "\0")


def parse_owner(raw: str | None) -> OwnerReference | None:
    """Parse ``entity:record_id`` into an OwnerReference."""
    if not raw:
        return None
    entity, sep, record_id = raw.partition(":")
    if not sep or not entity or not record_id:
        raise argparse.ArgumentTypeError(f"owner must look like entity:id, got '{raw}'")
    for part in (entity, record_id):
        if part in (".", "..") or any(c in part for c in _PATH_CHARS):
            raise argparse.ArgumentTypeError(f"owner must not contain path segments, got '{raw}'")
    return OwnerReference(entity=entity, record_id=record_id)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="document-analyzer",
        description="Attach a document, extract its text and print an AI analysis.",
    )
    parser.add_argument("file", type=Path, help="Document to analyze (.pdf, .png, .jpg, ...)")
    parser.add_argument("--owner", type=parse_owner, help="Host record as entity:id")
    parser.add_argument("--regenerate", action="store_true", help="Regenerate the analysis")
    parser.add_argument("--expand", action="store_true", help="Expand the analysis")
    parser.add_argument("--translate", metavar="LANGUAGE", help="Translate the analysis")
    return parser


def run_actions(
    controller: DocumentAnalyzerController,
    file: DocumentFile,
    args: argparse.Namespace,
) -> PipelineState:
    state = controller.submit_file(file)
    if args.regenerate and isinstance(state, Ready):
        state = controller.regenerate()
    if args.expand and isinstance(state, Ready):
        state = controller.expand()
    if args.translate and isinstance(state, Ready):
        state = controller.translate(args.translate)
    return state


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build pipeline -> run requested actions."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        file = DocumentFile.from_path(args.file)
    except OSError as exc:
        print(f"Cannot read {args.file}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    uses_db = settings.attachment_backend.lower() == "postgres"
    if uses_db:
        init_pool(settings)
    processor: Processor | None = None
    try:
        if uses_db:
            AttachmentRepository().ensure_schema()
        processor = build_processor(settings)
        controller = DocumentAnalyzerController(processor, settings, owner=args.owner)
        state = run_actions(controller, file, args)
    finally:
        if processor is not None:
            processor.close()
        if uses_db:
            close_pool()

    if isinstance(state, Error):
        print(f"{state.error.title}: {state.error.message}", file=sys.stderr)
        return 1
    print(controller.document_summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
