"""Command-line entry point for RFP Desk."""

import argparse
import asyncio
import sys
from pathlib import Path

from rfp_desk.attachments.resolver import AttachmentResolver
from rfp_desk.config import Settings, get_settings
from rfp_desk.errors import RFPDeskError
from rfp_desk.models.records import RFPRecord, RFPStatus
from rfp_desk.models.requests import RFPCreate, RFPPatch
from rfp_desk.models.results import ImportMode
from rfp_desk.query.engine import QueryEngine, Tab
from rfp_desk.services.transfer import TransferService
from rfp_desk.storage.backends import JSONFileStorage
from rfp_desk.store.record_store import RecordStore
from rfp_desk.utils.dates import format_deadline
from rfp_desk.utils.logging import configure_from_settings, get_logger


logger = get_logger(__name__)


class App:
    """The store, query engine and transfer service wired to one storage file."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.storage = JSONFileStorage(settings.storage_file)
        self.resolver = AttachmentResolver(handle_directory=settings.handle_directory)
        self.store = RecordStore(self.storage, settings.storage_key, resolver=self.resolver)
        self.engine = QueryEngine()
        self.transfer = TransferService(self.store, self.storage, settings)


def print_records(records: list[RFPRecord]) -> None:
    """Print RFPs as cards, roughly as the browse page shows them."""
    if not records:
        print("No RFPs found.")
        return

    for record in records:
        tag = " (example)" if record.is_seed else ""
        print("\n" + "-" * 60)
        print(f"[{record.status.value.upper()}] {record.project_name}{tag}")
        print(f"  id:       {record.id}")
        print(f"  summary:  {record.product_summary}")
        print(f"  deadline: {format_deadline(record.deadline)} ({record.duration_days} days)")
        if record.file_name or record.file_url:
            print(f"  document: {record.file_name or record.file_url}")
    print("-" * 60)


def cmd_list(app: App, args: argparse.Namespace) -> None:
    records = app.engine.view(app.store.list(), tab=args.tab, term=args.search)
    print_records(records)


def cmd_add(app: App, args: argparse.Namespace) -> None:
    data = RFPCreate(
        project_name=args.name,
        product_summary=args.summary,
        deadline=args.deadline,
        duration_days=args.duration,
        status=RFPStatus(args.status),
        file_url=args.file_url,
    )

    async def _create() -> RFPRecord:
        upload = await app.resolver.read_file(args.file) if args.file else None
        return await app.store.create(data, upload=upload)

    record = asyncio.run(_create())
    print(f"Saved RFP {record.id}: {record.project_name}")


def cmd_edit(app: App, args: argparse.Namespace) -> None:
    fields = {
        "project_name": args.name,
        "product_summary": args.summary,
        "deadline": args.deadline,
        "duration_days": args.duration,
        "status": args.status,
    }
    patch = RFPPatch(**{k: v for k, v in fields.items() if v is not None})
    record = app.store.update(args.id, patch)
    print(f"Updated RFP {record.id}")


def cmd_delete(app: App, args: argparse.Namespace) -> None:
    app.store.delete(args.id)
    print(f"Deleted RFP {args.id}")


def cmd_export(app: App, args: argparse.Namespace) -> None:
    output = args.output or Path(app.settings.export_file_name)
    output.write_text(app.transfer.export_data(), encoding="utf-8")
    print(f"Exported {len(app.store.list())} RFPs to {output}")


def cmd_import(app: App, args: argparse.Namespace) -> None:
    mode = ImportMode.REPLACE if args.replace else ImportMode.MERGE
    report = app.transfer.import_data(args.path.read_text(encoding="utf-8"), mode=mode)
    print(f"Successfully imported {report.imported} RFPs ({report.total} total)")


def cmd_share(app: App, args: argparse.Namespace) -> None:
    link = app.transfer.share_link(args.base_url)
    print(link.url)
    if link.via_session:
        print("Data was too large for the link and was saved for this session instead.")


def cmd_load_share(app: App, args: argparse.Namespace) -> None:
    result = app.transfer.load_shared_url(args.url)
    if result.ok:
        print(f"Loaded {len(result.value)} shared RFPs")
    else:
        print(f"No shared data loaded: {result.reason}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RFP Desk - record, browse and share RFPs")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tabs = [t.value for t in Tab]
    statuses = [s.value for s in RFPStatus]

    list_parser = subparsers.add_parser("list", help="Browse RFPs")
    list_parser.add_argument("--tab", default="recent", choices=tabs)
    list_parser.add_argument("--search", default=None, help="Search term")

    add_parser = subparsers.add_parser("add", help="Record a new RFP")
    add_parser.add_argument("--name", required=True, help="Project name")
    add_parser.add_argument("--summary", required=True, help="Product requirement summary")
    add_parser.add_argument("--deadline", required=True, help="Deadline (YYYY-MM-DD)")
    add_parser.add_argument("--duration", type=int, default=None, help="Duration in days")
    add_parser.add_argument("--status", default="open", choices=statuses)
    source = add_parser.add_mutually_exclusive_group()
    source.add_argument("--file", type=Path, default=None, help="Document to attach")
    source.add_argument("--file-url", default=None, help="Link to an existing document")

    edit_parser = subparsers.add_parser("edit", help="Edit an RFP")
    edit_parser.add_argument("id")
    edit_parser.add_argument("--name")
    edit_parser.add_argument("--summary")
    edit_parser.add_argument("--deadline")
    edit_parser.add_argument("--duration", type=int)
    edit_parser.add_argument("--status", choices=statuses)

    delete_parser = subparsers.add_parser("delete", help="Delete an RFP")
    delete_parser.add_argument("id")

    export_parser = subparsers.add_parser("export", help="Export RFPs to a JSON file")
    export_parser.add_argument("--output", type=Path, default=None)

    import_parser = subparsers.add_parser("import", help="Import RFPs from a JSON file")
    import_parser.add_argument("path", type=Path)
    import_parser.add_argument("--replace", action="store_true", help="Discard current RFPs first")

    share_parser = subparsers.add_parser("share", help="Create a shareable link")
    share_parser.add_argument("--base-url", default=None)

    load_parser = subparsers.add_parser("load-share", help="Load RFPs from a shared link")
    load_parser.add_argument("url")

    server_parser = subparsers.add_parser("serve", help="Start the local API server")
    server_parser.add_argument("--host", default="127.0.0.1", help="Host")
    server_parser.add_argument("--port", type=int, default=8000, help="Port")

    return parser


COMMANDS = {
    "list": cmd_list,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "export": cmd_export,
    "import": cmd_import,
    "share": cmd_share,
    "load-share": cmd_load_share,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_from_settings(settings)

    if args.command == "serve":
        import uvicorn
        uvicorn.run("rfp_desk.api.app:app", host=args.host, port=args.port)
        return 0

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        handler(App(settings), args)
    except RFPDeskError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
