"""Entry point for chalktalk package."""

import argparse
import sys
from pathlib import Path


def main() -> None:
    """Main entry point for the Chalktalk playbook editor."""
    parser = argparse.ArgumentParser(
        description="Chalktalk - Football Play Diagram Editor",
        prog="chalktalk",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the playbook store (default: ~/.chalktalk)",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the editor API server")
    serve.add_argument("--host", type=str, help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Port (default: 8000)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("list", help="List playbooks in the store")

    export = subparsers.add_parser("export", help="Export the current playbook")
    export.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory to write the export into (default: current directory)",
    )

    import_ = subparsers.add_parser("import", help="Import plays or playbooks from a file")
    import_.add_argument("file", type=Path, help="Exported JSON document")

    args = parser.parse_args()

    from chalktalk.config import configure_logging, get_config

    config = get_config()
    if args.data_dir is not None:
        config.data_dir = args.data_dir
    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        sys.exit(2)

    if args.command == "serve":
        from chalktalk.api.main import run_api

        run_api(host=args.host, port=args.port, reload=args.reload)
        return

    configure_logging(config)

    from chalktalk.session import EditorSession
    from chalktalk.storage import PlaybookStore, write_export

    store = PlaybookStore(config.store_path, default_playbook_name=config.default_playbook_name)
    session = EditorSession.open(store)

    if args.command == "export":
        path = write_export(session.playbook, args.output_dir)
        print(f"Exported '{session.playbook.name}' to {path}")
    elif args.command == "import":
        report = session.import_file(args.file)
        print(report.message)
        if not report.success:
            sys.exit(1)
    else:
        print(f"Playbooks in {store.path}")
        print("=" * 50)
        for playbook in session.library.playbooks:
            marker = "*" if playbook.id == session.library.current_playbook_id else " "
            print(f"{marker} {playbook.name} ({playbook.play_count} plays)")


if __name__ == "__main__":
    main()
