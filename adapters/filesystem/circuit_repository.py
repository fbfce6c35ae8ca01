from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import orjson

from domain.models import CircuitDocument
from domain.ports.repositories import CircuitRepository


class FileSystemCircuitRepository(CircuitRepository):
    def load(self, path: Path) -> CircuitDocument:
        text = path.read_text(encoding="utf-8")
        content = orjson.loads(self._strip_comments(text))
        return CircuitDocument.model_validate(content)

    def load_all(self, directory: Path) -> List[CircuitDocument]:
        return [document for _, document in self.load_all_with_paths(directory)]

    def load_all_with_paths(self, directory: Path) -> List[tuple[Path, CircuitDocument]]:
        return [(path, self.load(path)) for path in sorted(self._iter_paths(directory))]

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        for pattern in ("*.json", "*.jsonc"):
            yield from directory.glob(pattern)

    def _strip_comments(self, content: str) -> str:
        result_lines: List[str] = []
        for line in content.splitlines():
            in_string = False
            cleaned = []
            for idx, char in enumerate(line):
                if char == '"' and (idx == 0 or line[idx - 1] != "\\"):
                    in_string = not in_string
                if not in_string and char == "/" and idx + 1 < len(line) and line[idx + 1] == "/":
                    break
                cleaned.append(char)
            result_lines.append("".join(cleaned))
        return "\n".join(result_lines)
