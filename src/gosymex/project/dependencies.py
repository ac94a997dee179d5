from __future__ import annotations

from typing import Iterable, List, NamedTuple, Tuple

from ..models.records import Dependency


class DependencyPartition(NamedTuple):
    direct: Tuple[Dependency, ...]
    indirect: Tuple[Dependency, ...]

    def visible(self, show_all: bool = False) -> Tuple[Dependency, ...]:
        """Dependencies to display: direct ones, plus indirect ones when ``show_all``."""
        if show_all:
            return self.direct + self.indirect
        return self.direct


def classify(dependencies: Iterable[Dependency]) -> DependencyPartition:
    """Split on the indirect flag; each side is sorted by name, keeping manifest order on ties."""
    direct: List[Dependency] = []
    indirect: List[Dependency] = []
    for dep in dependencies:
        if dep.indirect:
            indirect.append(dep)
        else:
            direct.append(dep)
    return DependencyPartition(
        direct=tuple(sorted(direct, key=lambda dep: dep.name)),
        indirect=tuple(sorted(indirect, key=lambda dep: dep.name)),
    )
