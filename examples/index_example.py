"""Example script showing how to build an archive index programmatically."""
from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from catalog import IndexSummary, ScanConfig, build_index  # type: ignore  # noqa: E402


def main() -> None:
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else PROJECT_ROOT / "tests" / "data"
    result = build_index(ScanConfig(root=root))
    for item in result.items:
        print(item.model_dump_json(by_alias=True, exclude_none=True))
    print(IndexSummary.from_index(result.index).model_dump_json(indent=2))


if __name__ == "__main__":
    main()
