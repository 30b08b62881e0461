"""
CLI entrypoint: build or rebuild search indexes.

Usage:
    reindex D123
    reindex --type DREV
    reindex --all --background
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from reindex.catalog import CatalogNameResolver, ObjectCatalog
from reindex.config import ReindexConfig
from reindex.dispatcher import DispatchReport, ExecutionMode, IndexDispatcher
from reindex.documents import DocumentStore
from reindex.errors import DispatchError, ReindexError
from reindex.plugins import DiscoveredPlugins, default_registry
from reindex.queues import InlineIndexQueue, SpoolIndexQueue
from reindex.reporter import ConsoleReporter, Reporter
from reindex.resolver import IdentifierResolver
from reindex.search_indexer import SearchIndexer
from reindex.workflow import IndexWorkflow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reindex",
        description="Build or rebuild search indexes.",
        epilog="examples:\n  reindex D123\n  reindex --type DREV\n  reindex --all",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "objects",
        nargs="*",
        help="Names of objects to index, like 'D123' or 'T42'"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Reindex all documents."
    )
    parser.add_argument(
        "--type",
        metavar="TYPE",
        help="Object type to reindex, like \"TASK\" or \"DREV\"."
    )
    parser.add_argument(
        "--background",
        action="store_true",
        help="Instead of indexing in this process, queue tasks for background "
             "workers. This can improve performance, but makes it more "
             "difficult to debug search indexing."
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Keep going after an object fails and report all failures at the end"
    )
    parser.add_argument("--config", type=Path, help="YAML config file (default: $REINDEX_CONFIG_PATH)")
    parser.add_argument("--catalog", type=Path, help="Object catalog NDJSON (default: $REINDEX_CATALOG_PATH)")
    parser.add_argument("--spool", type=Path, help="Background queue spool (default: $REINDEX_SPOOL_PATH)")
    parser.add_argument("--documents", type=Path, help="Document store NDJSON (default: $REINDEX_DOCUMENTS_PATH)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def build_workflow(config: ReindexConfig, reporter: Reporter) -> IndexWorkflow:
    """
    Wire resolver, queues and dispatcher from configuration.

    Args:
        config: Loaded configuration
        reporter: Progress sink

    Returns:
        Fresh single-use workflow
    """
    # Resolution and inline indexing share one discovery
    plugins = DiscoveredPlugins(default_registry(config))
    name_resolver = CatalogNameResolver(ObjectCatalog(config.catalog_path))
    resolver = IdentifierResolver(name_resolver, plugins)

    search_indexer = SearchIndexer(plugins, DocumentStore(config.documents_path))
    dispatcher = IndexDispatcher(
        inline_queue=InlineIndexQueue(search_indexer),
        deferred_queue=SpoolIndexQueue(config.spool_path),
        reporter=reporter,
        fail_fast=config.fail_fast
    )
    return IndexWorkflow(resolver, dispatcher)


def print_failures(report: DispatchReport) -> None:
    print(f"⚠️  {len(report.failures)} object(s) failed to index:", file=sys.stderr)
    for failure in report.failures:
        print(f"  {failure.identifier}: {failure.cause}", file=sys.stderr)


def main(argv: Optional[List[str]] = None):
    """Run reindex CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ReindexConfig(config_path=args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.catalog:
        config.catalog_path = args.catalog
    if args.spool:
        config.spool_path = args.spool
    if args.documents:
        config.documents_path = args.documents
    if args.continue_on_error:
        config.fail_fast = False

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    mode = ExecutionMode.DEFERRED if args.background else ExecutionMode.INLINE

    try:
        workflow = build_workflow(config, ConsoleReporter())
        report = workflow.run_request(
            names=args.objects,
            type_filter=args.type,
            all=args.all,
            mode=mode
        )
    except DispatchError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        if e.report is not None:
            print(f"Dispatched {len(e.report)} object(s) before the failure.", file=sys.stderr)
        sys.exit(1)
    except ReindexError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        # Malformed catalog records or identifiers
        print(f"❌ Error reading catalog: {e}", file=sys.stderr)
        sys.exit(1)

    if not report.ok:
        print_failures(report)

    sys.exit(0)


if __name__ == "__main__":
    main()
