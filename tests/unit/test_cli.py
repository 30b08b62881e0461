"""
Unit tests for the reindex command line.
"""
import pytest

from reindex.__main__ import build_parser, build_workflow, main
from reindex.catalog import CatalogRecord
from reindex.config import ReindexConfig
from reindex.dispatcher import ExecutionMode
from reindex.documents import DocumentStore
from reindex.plugins import default_registry
from reindex.queues import SpoolIndexQueue
from reindex.reporter import MemoryReporter


def run_cli(argv):
    """Run main and return its exit code."""
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestArgumentParsing:
    """Test argparse wiring."""

    def test_defaults(self):
        """Should default to inline, fail-fast, no selectors."""
        args = build_parser().parse_args([])
        assert args.objects == []
        assert args.all is False
        assert args.type is None
        assert args.background is False
        assert args.continue_on_error is False

    def test_selectors(self):
        """Should accept objects, --type and --background."""
        args = build_parser().parse_args(["D1", "T2", "--background"])
        assert args.objects == ["D1", "T2"]
        assert args.background is True

        args = build_parser().parse_args(["--type", "DREV"])
        assert args.type == "DREV"


class TestBuildWorkflow:
    """Test the wiring behind the command line."""

    @pytest.fixture(autouse=True)
    def counted_registry(self, catalog, tmp_path, monkeypatch):
        self.config = ReindexConfig()
        self.config.catalog_path = catalog.path
        self.config.documents_path = tmp_path / "documents.ndjson"

        registry = default_registry(self.config)
        discover = registry.discover_all
        self.discoveries = []

        def counting_discover_all():
            self.discoveries.append(1)
            return discover()

        monkeypatch.setattr(registry, "discover_all", counting_discover_all)
        monkeypatch.setattr("reindex.__main__.default_registry", lambda config: registry)

    def test_inline_type_run_discovers_once(self):
        """Should share one plugin discovery between resolution and inline indexing."""
        workflow = build_workflow(self.config, MemoryReporter())

        report = workflow.run_request(type_filter="DREV", mode=ExecutionMode.INLINE)

        assert len(self.discoveries) == 1
        assert len(report) == 2
        assert [d.phid for d in DocumentStore(self.config.documents_path).load()] == ["PHID-DREV-1", "PHID-DREV-2"]

    def test_inline_names_run_discovers_once(self):
        """Should discover once when indexing named objects inline."""
        workflow = build_workflow(self.config, MemoryReporter())

        workflow.run_request(names=["D1", "T1", "T2"], mode=ExecutionMode.INLINE)

        assert len(self.discoveries) == 1


class TestMain:
    """Test end to end command runs against a temporary catalog."""

    @pytest.fixture(autouse=True)
    def paths(self, catalog, tmp_path, monkeypatch):
        self.catalog = catalog
        self.spool = tmp_path / "queue.ndjson"
        self.documents = tmp_path / "documents.ndjson"
        monkeypatch.setenv("REINDEX_CATALOG_PATH", str(catalog.path))
        monkeypatch.setenv("REINDEX_SPOOL_PATH", str(self.spool))
        monkeypatch.setenv("REINDEX_DOCUMENTS_PATH", str(self.documents))

    def test_index_named_objects_inline(self, capsys):
        """Should build documents in process and exit 0."""
        code = run_cli(["D1", "T1"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Indexing 1 object(s) of type DREV." in out
        assert "Indexing 'PHID-TASK-1'..." in out
        assert out.strip().endswith("Done.")
        assert [d.phid for d in DocumentStore(self.documents).load()] == ["PHID-DREV-1", "PHID-TASK-1"]
        assert not self.spool.exists()

    def test_index_type_in_background(self, capsys):
        """Should queue tasks without building documents."""
        code = run_cli(["--type", "task", "--background"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Queueing 'PHID-TASK-2'..." in out
        assert [t.identifier for t in SpoolIndexQueue(self.spool).pending()] == ["PHID-TASK-1", "PHID-TASK-2"]
        assert not self.documents.exists()

    def test_index_all(self):
        """Should index every indexable object."""
        code = run_cli(["--all"])

        assert code == 0
        assert len(DocumentStore(self.documents).load()) == 4

    def test_path_flags_override_env(self, tmp_path):
        """Should use paths given on the command line."""
        spool = tmp_path / "other-queue.ndjson"

        code = run_cli(["--all", "--background", "--spool", str(spool)])

        assert code == 0
        assert len(SpoolIndexQueue(spool).pending()) == 4
        assert not self.spool.exists()

    def test_conflicting_selectors(self, capsys):
        """Should exit 1 when names are combined with --all."""
        code = run_cli(["D1", "--all"])

        assert code == 1
        assert "alongside" in capsys.readouterr().err

    def test_no_selectors(self, capsys):
        """Should exit 1 without any selector."""
        assert run_cli([]) == 1
        assert "Provide one of" in capsys.readouterr().err

    def test_unknown_object(self, capsys):
        """Should exit 1 and name the unknown object, indexing nothing."""
        code = run_cli(["D1", "T404"])

        assert code == 1
        assert "'T404' is not the name of a known object." in capsys.readouterr().err
        assert not self.documents.exists()

    def test_nothing_to_index(self, capsys):
        """Should exit 1 when a type has no objects."""
        assert run_cli(["--type", "WIKI"]) == 1
        assert "Nothing to index" in capsys.readouterr().err

    def test_fail_fast_exits_nonzero(self, capsys):
        """Should stop at the first failing object."""
        self.catalog.add(CatalogRecord(phid="PHID-PSTE-1", name="P1", title="paste"))

        code = run_cli(["P1", "D1"])

        err = capsys.readouterr().err
        assert code == 1
        assert "PHID-PSTE-1" in err
        assert not self.documents.exists()

    def test_continue_on_error_reports_failures(self, capsys):
        """Should index the rest and list failures while exiting 0."""
        self.catalog.add(CatalogRecord(phid="PHID-PSTE-1", name="P1", title="paste"))

        code = run_cli(["P1", "D1", "--continue-on-error"])

        err = capsys.readouterr().err
        assert code == 0
        assert "1 object(s) failed to index" in err
        assert "PHID-PSTE-1" in err
        assert [d.phid for d in DocumentStore(self.documents).load()] == ["PHID-DREV-1"]

    def test_broken_plugin_config(self, tmp_path, capsys):
        """Should exit 1 when a configured plugin cannot be loaded."""
        config_file = tmp_path / "reindex.yaml"
        config_file.write_text("plugins:\n  - no_such_module_xyz:Indexer\n")

        assert run_cli(["--all", "--config", str(config_file)]) == 1
        assert "no_such_module_xyz" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path, capsys):
        """Should exit 1 when --config does not exist."""
        assert run_cli(["--all", "--config", str(tmp_path / "missing.yaml")]) == 1
        assert "Error loading config" in capsys.readouterr().err

    def test_invalid_log_level(self, monkeypatch, capsys):
        """Should exit 1 with a config error for an unknown log level."""
        monkeypatch.setenv("REINDEX_LOG_LEVEL", "FOO")

        assert run_cli(["--all"]) == 1
        assert "Error loading config" in capsys.readouterr().err
