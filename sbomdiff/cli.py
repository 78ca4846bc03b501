from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import yaml

from .errors import CompareError, ConfigurationError
from .export_excel import write_workbook
from .ingest import list_documents, load_document
from .models import Config, SpdxDocument
from .report import ComparisonReport, build_report

LOGGER = logging.getLogger(__name__)


def load_config(path: Optional[str]) -> Config:
    if not path or not Path(path).exists():
        LOGGER.debug("No config at %s, using defaults", path)
        return {}
    with open(path, "r", encoding="utf-8") as file:
        try:
            config = yaml.safe_load(file) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid config {path}: {exc}") from exc
    if not isinstance(config, dict):
        raise ConfigurationError(f"Invalid config {path}: top level is not a mapping")
    return config


def unique_names(paths: Sequence[str]) -> List[str]:
    names: List[str] = []
    seen = {}
    for path in paths:
        name = Path(path).name
        seen[name] = seen.get(name, 0) + 1
        names.append(name if seen[name] == 1 else f"{name} ({seen[name]})")
    return names


def load_documents(inputs: Iterable[str]) -> Tuple[List[SpdxDocument], List[str]]:
    paths: List[str] = []
    for item in inputs:
        found = list_documents(item)
        if not found:
            raise ConfigurationError(f"No SPDX documents found at {item}")
        paths.extend(found)
    return [load_document(p) for p in paths], paths


def build_results(config: Config, inputs: Sequence[str], names: Optional[Sequence[str]] = None) -> ComparisonReport:
    documents, paths = load_documents(inputs)
    doc_names = list(names) if names else unique_names(paths)
    return build_report(documents, doc_names, config)


def run(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare SPDX documents side by side into an Excel workbook")
    parser.add_argument("documents", nargs="+", help="SPDX document files or folders (searched recursively)")
    parser.add_argument("--out", required=True)
    parser.add_argument("--config", default="config.yaml")
    parser.add_argument("--name", action="append", help="Document name; repeat once per document")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing output file")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(list(argv) if argv else None)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(levelname)s %(name)s: %(message)s")

    if Path(args.out).exists() and not args.force:
        LOGGER.error("Output file %s already exists. Change the name of the result file.", args.out)
        return 1

    try:
        config = load_config(args.config)
        report = build_results(config, args.documents, args.name)
        Path(args.out).parent.mkdir(parents=True, exist_ok=True)
        write_workbook(args.out, report, config)
    except CompareError as exc:
        LOGGER.error("%s", exc)
        return 1

    different = sum(r.different_count for r in report.categories)
    LOGGER.info("Wrote %s (documents=%d, different rows=%d)", args.out, len(report.doc_names), different)
    return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
