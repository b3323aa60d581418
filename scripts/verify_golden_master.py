import argparse
import difflib
import sys

from capacity_artifacts.exceptions import ReferenceDriftError
from capacity_artifacts.reference.golden import reference_documents
from capacity_artifacts.utils.config import config

GOLDEN = config.GOLDEN_DIR


def diff(name: str, expected: str, actual: str) -> None:
    if expected == actual:
        print(f"✅ {name}: OK")
        return

    print(f"❌ {name}: CHANGED")
    for line in difflib.unified_diff(
        expected.splitlines(),
        actual.splitlines(),
        fromfile=f"golden/{name}",
        tofile="current",
        lineterm="",
    ):
        print(line)
    raise ReferenceDriftError(f"{name} no longer matches its golden snapshot")


def record() -> None:
    GOLDEN.mkdir(parents=True, exist_ok=True)
    for name, render in reference_documents().items():
        path = GOLDEN / f"{name}.html"
        path.write_text(render(), encoding="utf-8", newline="\n")
        print(f"📝 {path.name}: recorded")


def main():
    parser = argparse.ArgumentParser(description="Diff reference documents against golden snapshots")
    parser.add_argument("--record", action="store_true", help="Overwrite the snapshots with current output")
    args = parser.parse_args()

    if args.record:
        record()
        return

    drifted = []
    for name, render in reference_documents().items():
        path = GOLDEN / f"{name}.html"
        if not path.exists():
            print(f"⚠️  {path.name}: no snapshot (run with --record)")
            drifted.append(path.name)
            continue
        try:
            diff(path.name, path.read_text(encoding="utf-8"), render())
        except ReferenceDriftError:
            drifted.append(path.name)

    if drifted:
        sys.exit(1)


if __name__ == "__main__":
    main()
