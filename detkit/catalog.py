from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Tuple, Union

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ClassCatalog:
    """
    Ordered class names, indexed by class id.
    """

    names: Tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple.
        object.__setattr__(self, "names", tuple(str(n) for n in self.names))

    def __len__(self) -> int:
        return len(self.names)

    def name(self, class_id: int) -> str:
        if 0 <= class_id < len(self.names):
            return self.names[class_id]
        return f"class_{class_id}"

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, str]) -> "ClassCatalog":
        """Build from {id: name}; ids missing below the largest one get `class_<id>`."""
        if not mapping:
            return cls(())
        size = max(mapping) + 1
        return cls(tuple(mapping.get(i, f"class_{i}") for i in range(size)))


# Surfrider litter dataset, 10 classes (data.yaml order).
SURFRIDER_CATALOG = ClassCatalog(
    (
        "Bottle-shaped",
        "Can-shaped",
        "Drum",
        "Easily namable",
        "Fishing net - cord",
        "Insulating material",
        "Other packaging",
        "Sheet - tarp - plastic bag - fragment",
        "Tire",
        "Unclear",
    )
)


def _unquote(value: str) -> str:
    return value.strip().strip("'").strip('"')


def load_class_catalog(metadata_path: PathLike) -> ClassCatalog:
    """
    Load class names from the `names:` block of an Ultralytics-style yaml file.

    The id mapping, block list and flow list forms are understood:

        names:              names:              names: [person, bicycle]
          0: person           - person
          1: bicycle          - bicycle

    Only that block is read, so no YAML library is needed.
    """

    path = Path(metadata_path)
    if not path.exists():
        raise FileNotFoundError(f"Class metadata not found: {path}")

    by_id: Dict[int, str] = {}
    listed: List[str] = []
    in_names = False

    with open(path, "r", encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line == "names:":
                in_names = True
                continue
            if line.startswith("names:") and line.endswith("]"):
                # Flow style: names: [person, bicycle]
                inner = line.split("[", 1)[1][:-1]
                return ClassCatalog(tuple(_unquote(n) for n in inner.split(",") if n.strip()))
            if not in_names:
                continue
            # A new top-level key ends the block.
            if not raw[:1].isspace() and not line.startswith("-"):
                break

            if line.startswith("-"):
                listed.append(_unquote(line[1:]))
                continue
            if ":" not in line:
                continue
            left, right = line.split(":", 1)
            left = left.strip()
            if not left.isdigit():
                continue
            by_id[int(left)] = _unquote(right)

    if listed:
        return ClassCatalog(tuple(listed))
    return ClassCatalog.from_mapping(by_id)
