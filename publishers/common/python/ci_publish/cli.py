#!/usr/bin/env python3
"""Package build outputs described by a publisher config.yaml."""
from __future__ import annotations

import argparse
import os
from pathlib import Path

from .config import PublisherConfig
from .errors import ConfigurationError
from .publisher import PackagePublisher
from .results import IntegrationResult, Modification


def write_outputs(lines: list[str]) -> None:
    github_output = os.environ.get("GITHUB_OUTPUT")
    if github_output:
        with Path(github_output).open("a", encoding="utf-8") as fh:
            fh.write("\n".join(lines) + "\n")
    else:
        print("\n".join(lines))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ci-publish", description=__doc__)
    parser.add_argument("config", type=Path)
    parser.add_argument("--project", required=True, help="Project name used for package lists.")
    parser.add_argument("--label", required=True, help="Build label of the finished build.")
    parser.add_argument(
        "--artifact-dir",
        type=Path,
        default=Path(os.environ.get("ARTIFACT_DEST", "artifacts")),
        help="Artifact directory that receives packages and package lists.",
    )
    parser.add_argument(
        "--working-dir",
        type=Path,
        default=Path.cwd(),
        help="Build working directory; default base for relative patterns.",
    )
    parser.add_argument(
        "--modified",
        action="append",
        default=[],
        metavar="FILE",
        help="File changed by this build (repeatable).",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Package even when the build has no modifications.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be packaged and exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        spec = PublisherConfig(args.config.resolve()).specification()
    except ConfigurationError as exc:
        raise SystemExit(f"[error] {exc}") from exc

    result = IntegrationResult(
        project_name=args.project,
        label=args.label,
        working_directory=args.working_dir.resolve(),
        artifact_directory=args.artifact_dir.resolve(),
        modifications=[Modification(file_name=name) for name in args.modified],
    )
    publisher = PackagePublisher(spec)

    if args.dry_run:
        for path in publisher.resolve_files(result):
            print(path)
        return

    if not (args.force or publisher.should_package(result)):
        print(f"[package] No modifications for {result.project_name}; skipping package")
        return

    outcome = publisher.publish(result)
    if outcome.archive_path is not None:
        write_outputs(
            [
                f"archive_path={outcome.archive_path}",
                f"archive_name={outcome.archive_path.name}",
            ]
        )
    if not outcome.succeeded:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
