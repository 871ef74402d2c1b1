"""docx2ir CLI"""

import argparse
import logging
import sys
from pathlib import Path

from docx2ir import Docx2Ir
from docx2ir.convert.context import TRACK_CHANGES_MODES
from docx2ir.errors import ConversionError
from docx2ir.ir.writer import IrJsonWriter
from docx2ir.media import DirectoryMediaStore


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="DOCX를 IR(JSON)로 변환",
        prog="docx2ir",
    )
    parser.add_argument("input", help="입력 DOCX 파일")
    parser.add_argument("-o", "--output", help="출력 JSON 파일 (기본: 입력 파일명.json)")
    parser.add_argument(
        "--track-changes",
        choices=TRACK_CHANGES_MODES,
        default=None,
        help="변경 추적 처리 (기본: DOCX2IR_TRACK_CHANGES 또는 accept)",
    )
    parser.add_argument("--extract-media", metavar="DIR", help="이미지를 저장할 디렉터리")
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {input_path} not found", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output) if args.output else input_path.with_suffix(".json")
    media_store = DirectoryMediaStore(args.extract_media) if args.extract_media else None

    try:
        converter = Docx2Ir(track_changes=args.track_changes, media_store=media_store)
        result = converter.convert(input_path)
        IrJsonWriter().write(result.document, output_path, result.warnings)
        for warning in result.warnings:
            print(f"Warning: {warning}", file=sys.stderr)
        print(f"Converted: {output_path}")
    except (ConversionError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
