from __future__ import annotations

from pathlib import Path

from renfiles.batch import BatchRunner
from renfiles.classifier import ClassificationEngine
from renfiles.config import ExecutionMode, RunConfig
from renfiles.models import CandidateFile


class RecordingLabeler:
    def __init__(self) -> None:
        self.calls: list[tuple[Path, frozenset[str]]] = []

    def assign(self, path, labels) -> None:
        self.calls.append((path, frozenset(labels)))

    def describe(self, path, labels) -> str:
        return f"label {path}"


class ExplodingEngine(ClassificationEngine):
    def classify(self, name: str):
        if name.startswith("boom"):
            raise RuntimeError("unexpected")
        return super().classify(name)


def populate(source: Path, names: list[str]) -> list[CandidateFile]:
    source.mkdir(parents=True, exist_ok=True)
    for name in names:
        (source / name).write_text(name, encoding="utf-8")
    return [CandidateFile(directory=source, name=name) for name in names]


def test_run_counts_each_outcome(tmp_path: Path) -> None:
    source = tmp_path / "src"
    candidates = populate(
        source,
        ["NZZS_20230405edition.pdf", "random_notes.pdf", "20230101foobar.pdf", "NZZ_.pdf"],
    )
    (source / "folder.pdf").mkdir()
    candidates.append(CandidateFile(directory=source, name="folder.pdf"))
    labeler = RecordingLabeler()
    runner = BatchRunner(RunConfig(source_dir=source, dest_dir=tmp_path / "dest"), labeler=labeler)

    summary = runner.run(candidates)

    assert (summary.processed, summary.skipped, summary.failed, summary.ignored) == (2, 1, 1, 1)
    assert summary.errors and summary.errors[0].startswith("NZZ_.pdf")
    assert (tmp_path / "dest" / "nzzs" / "20230405nzzs.pdf").exists()
    assert (tmp_path / "dest" / "20230101foobar.pdf").exists()
    assert (source / "random_notes.pdf").exists()
    assert (source / "NZZ_.pdf").exists()
    assert len(labeler.calls) == 1


def test_unexpected_error_does_not_stop_batch(tmp_path: Path) -> None:
    source = tmp_path / "src"
    candidates = populate(source, ["boom.pdf", "NZZ_20230405.pdf"])
    config = RunConfig(source_dir=source, dest_dir=tmp_path / "dest")
    runner = BatchRunner(config, classifier=ExplodingEngine())

    summary = runner.run(candidates)

    assert summary.failed == 1
    assert summary.processed == 1
    assert "unexpected" in summary.errors[0]
    assert (tmp_path / "dest" / "nzz" / "20230405nzz.pdf").exists()


def test_unreadable_entry_is_a_per_file_failure(tmp_path: Path, monkeypatch) -> None:
    source = tmp_path / "src"
    candidates = populate(source, ["locked.pdf", "NZZ_20230405.pdf"])
    original_is_dir = Path.is_dir

    def is_dir(self: Path) -> bool:
        if self.name == "locked.pdf":
            raise PermissionError(13, "Permission denied", str(self))
        return original_is_dir(self)

    monkeypatch.setattr(Path, "is_dir", is_dir)
    summary = BatchRunner(RunConfig(source_dir=source, dest_dir=tmp_path / "dest")).run(candidates)

    assert (summary.processed, summary.failed, summary.ignored) == (1, 1, 0)
    assert summary.errors[0].startswith("locked.pdf")
    assert (tmp_path / "dest" / "nzz" / "20230405nzz.pdf").exists()


def test_destination_equal_to_source_is_not_a_failure(tmp_path: Path) -> None:
    source = tmp_path / "src"
    candidates = populate(source, ["20230101foobar.pdf"])

    summary = BatchRunner(RunConfig(source_dir=source, dest_dir=source)).run(candidates)

    assert (summary.processed, summary.failed) == (1, 0)
    assert (source / "20230101foobar.pdf").exists()


def test_dry_run_batch_changes_nothing(tmp_path: Path, capsys) -> None:
    source = tmp_path / "src"
    names = ["NZZS_20230405edition.pdf", "compw-2014-03-07.pdf"]
    candidates = populate(source, names)
    config = RunConfig(source_dir=source, dest_dir=tmp_path / "dest", mode=ExecutionMode.DRY_RUN)

    summary = BatchRunner(config, labeler=RecordingLabeler()).run(candidates)

    assert summary.processed == 2
    assert sorted(path.name for path in source.iterdir()) == sorted(names)
    assert not (tmp_path / "dest").exists()
    output = capsys.readouterr().out
    assert "mv NZZS_20230405edition.pdf" in output
    assert "mv compw-2014-03-07.pdf" in output


def test_iter_outcomes_is_lazy_and_ordered(tmp_path: Path) -> None:
    source = tmp_path / "src"
    candidates = populate(source, ["NZZ_20230405.pdf", "NZZ_20230406.pdf"])
    runner = BatchRunner(RunConfig(source_dir=source, dest_dir=tmp_path / "dest"))

    outcomes = runner.iter_outcomes(candidates)
    assert (source / "NZZ_20230405.pdf").exists()

    first_candidate, first_outcome = next(outcomes)
    assert first_candidate.name == "NZZ_20230405.pdf"
    assert first_outcome is not None and first_outcome.success
    assert (source / "NZZ_20230406.pdf").exists()

    rest = list(outcomes)
    assert [candidate.name for candidate, _ in rest] == ["NZZ_20230406.pdf"]


def test_summary_serialization() -> None:
    runner = BatchRunner(RunConfig())
    summary = runner.run([])
    assert summary.to_dict() == {
        "processed": 0,
        "skipped": 0,
        "failed": 0,
        "ignored": 0,
        "total": 0,
        "errors": [],
    }
