import argparse
import sys
from pathlib import Path

from contract_analyst.citations.models import CitationSegment, Segment
from contract_analyst.config.settings import Settings
from contract_analyst.documents.exceptions import DocumentStoreError
from contract_analyst.documents.file_loader import FileLoader
from contract_analyst.documents.models import SourceDocument, Upload
from contract_analyst.llm.exceptions import ChatError
from contract_analyst.logging.logger import Log
from contract_analyst.pdf.models import ProgressState
from contract_analyst.workspace.preview import PreviewResult
from contract_analyst.workspace.workspace import ContractWorkspace, ModelReply, build_workspace


def format_segments(segments: list[Segment]) -> str:
    """Render reply segments for a terminal: resolvable citations as [label]."""
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, CitationSegment):
            parts.append(f"[{segment.label}]" if segment.is_interactive else segment.label)
        else:
            parts.append(segment.value)
    return "".join(parts)


def _print_progress(upload: Upload, progress: ProgressState) -> None:
    if progress.pages_total:
        print(f"  {upload.name}: {progress.pages_done} / {progress.pages_total} pages", end="\r")


def _describe(document: SourceDocument) -> str:
    line = f"{document.id}  {document.name}  {document.status.value}  {document.page_count} pages"
    if document.error_message:
        line += f"  ({document.error_message})"
    return line


def _save_preview(result: PreviewResult, out: Path) -> int:
    if result.image is None:
        print(f"{result.file_name} p.{result.page_number}: {result.error_message}", file=sys.stderr)
        return 1
    out.write_bytes(result.image.png)
    print(f"Saved {result.file_name} p.{result.page_number} to {out}")
    return 0


def _print_reply(workspace: ContractWorkspace, reply: ModelReply, preview_dir: Path | None) -> None:
    print(format_segments(reply.segments))
    if preview_dir is None:
        return
    preview_dir.mkdir(parents=True, exist_ok=True)
    for index, segment in enumerate(reply.citations, start=1):
        result = workspace.preview(segment)
        if result is not None:
            _save_preview(result, preview_dir / f"citation_{index}_p{result.page_number}.png")


def cmd_ingest(workspace: ContractWorkspace, args: argparse.Namespace) -> int:
    loader = FileLoader()
    uploads = [loader.load(Path(p)) for p in args.paths]
    documents = workspace.upload(uploads, on_progress=_print_progress)
    print()
    for document in documents:
        print(_describe(document))
    return 0 if all(d.is_ready for d in documents) else 1


def cmd_list(workspace: ContractWorkspace, args: argparse.Namespace) -> int:
    documents = workspace.documents()
    for document in documents:
        print(_describe(document))
    budget = workspace.context_budget()
    print(f"{len(documents)} document(s), ~{budget.estimated_tokens} tokens")
    if budget.is_over_limit:
        print("Warning: Total content is very large. Responses may be slower or hit limits.")
    return 0


def cmd_remove(workspace: ContractWorkspace, args: argparse.Namespace) -> int:
    workspace.remove(args.document_id)
    return 0


def cmd_clear(workspace: ContractWorkspace, args: argparse.Namespace) -> int:
    workspace.clear()
    return 0


def cmd_ask(workspace: ContractWorkspace, args: argparse.Namespace) -> int:
    workspace.load_context()
    _print_reply(workspace, workspace.ask(args.question), args.preview_dir)
    return 0


def cmd_chat(workspace: ContractWorkspace, args: argparse.Namespace) -> int:
    print(workspace.load_context())
    while True:
        try:
            question = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if question:
            _print_reply(workspace, workspace.ask(question), args.preview_dir)


def cmd_preview(workspace: ContractWorkspace, args: argparse.Namespace) -> int:
    matches = [d for d in workspace.documents() if d.name == args.name]
    if not matches:
        print(f"No stored document named '{args.name}'", file=sys.stderr)
        return 1
    result = workspace.preview_page(matches[0], args.page, scale=args.scale)
    return _save_preview(result, args.out)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contract-analyst",
        description="Ask questions about PDF contracts and open cited pages.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="extract and store PDF files")
    ingest.add_argument("paths", nargs="+")
    ingest.set_defaults(handler=cmd_ingest)

    sub.add_parser("list", help="list stored documents").set_defaults(handler=cmd_list)

    remove = sub.add_parser("remove", help="delete one stored document")
    remove.add_argument("document_id")
    remove.set_defaults(handler=cmd_remove)

    sub.add_parser("clear", help="delete all stored documents").set_defaults(handler=cmd_clear)

    for name, handler, help_text in (
        ("ask", cmd_ask, "ask a single question"),
        ("chat", cmd_chat, "interactive question loop"),
    ):
        command = sub.add_parser(name, help=help_text)
        if name == "ask":
            command.add_argument("question")
        command.add_argument("--preview-dir", type=Path, default=None)
        command.set_defaults(handler=handler)

    preview = sub.add_parser("preview", help="render one page of a stored document")
    preview.add_argument("name")
    preview.add_argument("page", type=int)
    preview.add_argument("--out", type=Path, required=True)
    preview.add_argument("--scale", type=float, default=settings.inline_render_scale)
    preview.set_defaults(handler=cmd_preview)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build workspace -> dispatch command."""
    settings = Settings()
    # stdout carries replies and progress; logs go to stderr.
    Log.configure(settings.log_level, stream=sys.stderr)
    args = build_parser(settings).parse_args(argv)
    try:
        workspace = build_workspace(settings)
        return int(args.handler(workspace, args))
    except (ChatError, DocumentStoreError, FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
