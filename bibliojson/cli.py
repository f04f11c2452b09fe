"""Command line entry point: load a package and report validation problems."""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence

from .package import InvalidRefId, Package, PackageLoadError, PackageValidationError

DEFAULT_PACKAGE_DIR = "./res"


def format_validation_errors(errors: Iterable[InvalidRefId]) -> str:
    """Number each distinct unknown reference with the line it first appears on."""
    seen = set()
    unique: list[InvalidRefId] = []
    for error in errors:
        if error.id in seen:
            continue
        seen.add(error.id)
        unique.append(error)
    return "\n".join(
        f" {number}. {error.id} on {error.line}" for number, error in enumerate(unique, start=1)
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Load and validate a package, printing the outcome."""
    parser = argparse.ArgumentParser(description="Load and validate a biblio-json package.")
    parser.add_argument("path", nargs="?", default=DEFAULT_PACKAGE_DIR, help="package directory")
    args = parser.parse_args(argv)

    try:
        package = Package.load(args.path)
    except PackageLoadError as exc:
        print("Package loaded with errors:\n" + "\n".join(exc.errors) + "\n")
        return 1
    print("Package loaded!")

    try:
        package.validate()
    except PackageValidationError as exc:
        print("Unknown errors:\n" + format_validation_errors(exc.errors))
        return 1
    print("Validation passed!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())