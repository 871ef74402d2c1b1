"""IR Writer

IR 모델을 JSON 호환 딕셔너리/문자열로 변환하는 라이터.
각 노드는 {"t": 노드 타입, ...필드} 형태로 직렬화됩니다.
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List

from docx2ir.ir.models import IrAttr, IrDocument


class IrJsonWriter:
    """IR → JSON 변환"""

    def __init__(self, indent: int | None = 2):
        self.indent = indent

    def to_dict(self, document: IrDocument, warnings: List[str] | None = None) -> Dict[str, Any]:
        """IrDocument를 딕셔너리로 변환"""
        result = {
            "meta": {key: self.node_to_json(value) for key, value in document.meta.items()},
            "blocks": self.node_to_json(document.blocks),
        }
        if warnings is not None:
            result["warnings"] = list(warnings)
        return result

    def dumps(self, document: IrDocument, warnings: List[str] | None = None) -> str:
        return json.dumps(self.to_dict(document, warnings), ensure_ascii=False, indent=self.indent)

    def write(self, document: IrDocument, output_path: str | Path, warnings: List[str] | None = None) -> Path:
        """JSON 파일로 저장"""
        output_path = Path(output_path)
        output_path.write_text(self.dumps(document, warnings), encoding="utf-8")
        return output_path

    def node_to_json(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [self.node_to_json(v) for v in value]
        if isinstance(value, IrAttr):
            # [식별자, 클래스들, [키, 값] 쌍들]
            return [value.identifier, list(value.classes), [list(kv) for kv in value.attributes]]
        if is_dataclass(value) and not isinstance(value, type):
            data: Dict[str, Any] = {"t": type(value).__name__.removeprefix("Ir")}
            for f in fields(value):
                data[f.name] = self.node_to_json(getattr(value, f.name))
            return data
        return value
